"""Data models for catalog upgrades."""
from dataclasses import dataclass
from typing import List, Optional

@dataclass
class CatalogUpgrade:
    """A single requested version change."""
    path: List[str]
    new_value: str

    @property
    def name(self) -> str:
        """Dependency name targeted by the upgrade."""
        return self.path[-1]

@dataclass
class CatalogDependency:
    """A dependency pinned in a catalog."""
    name: str
    version: str
    catalog: Optional[str] = None

    @property
    def path(self) -> List[str]:
        """Key path of the dependency inside the workspace file."""
        if self.catalog is None:
            return ["catalog", self.name]
        return ["catalogs", self.catalog, self.name]
