"""Catalog dependency listing."""
from typing import List, Optional

from .models import CatalogDependency
from .parser import CatalogParser
from .schema import CatalogsConfig
from ..options import Options

def catalog_dependencies(config: CatalogsConfig) -> List[CatalogDependency]:
    """Flatten validated catalogs into dependencies, default catalog first."""
    dependencies = [
        CatalogDependency(name=name, version=version)
        for name, version in (config.catalog or {}).items()
    ]
    for catalog, entries in (config.catalogs or {}).items():
        dependencies.extend(
            CatalogDependency(name=name, version=version, catalog=catalog)
            for name, version in entries.items()
        )
    return dependencies

def list_catalog_dependencies(
    file_content: str,
    options: Optional[Options] = None,
    file_path: Optional[str] = None,
) -> List[CatalogDependency]:
    """Read every catalog dependency of a workspace file.

    Returns an empty list when the document is not catalog-shaped.

    Raises:
        CatalogSyntaxError: If the YAML is malformed.
    """
    _, config = CatalogParser.parse(file_content, options=options, file_path=file_path)
    if config is None:
        return []
    return catalog_dependencies(config)
