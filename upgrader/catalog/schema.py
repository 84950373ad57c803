"""Pydantic models for catalog validation."""
from typing import Dict, Optional
from pydantic import BaseModel

class CatalogsConfig(BaseModel):
    """Root schema of a workspace file holding dependency catalogs.

    Only the catalog sections are described; any other top-level keys
    (``packages``, ``onlyBuiltDependencies``, ...) are ignored.
    """
    catalog: Optional[Dict[str, str]] = None
    catalogs: Optional[Dict[str, Dict[str, str]]] = None
