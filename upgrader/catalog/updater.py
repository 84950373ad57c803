"""In-place catalog dependency updater."""
from typing import Optional, Sequence

from yaml.nodes import MappingNode, SequenceNode

from .document import CatalogDocument
from .models import CatalogUpgrade
from .parser import CatalogParser, is_catalog_path
from .schema import CatalogsConfig
from ..options import Options

def current_version(config: CatalogsConfig, path: Sequence[str]) -> Optional[str]:
    """Read the version currently pinned at `path`, if any."""
    if path[0] == "catalog":
        return (config.catalog or {}).get(path[1])
    group = (config.catalogs or {}).get(path[1])
    if group is None or len(path) < 3:
        return None
    return group.get(path[2])

def change_dependency_in(
    document: CatalogDocument,
    path: Sequence[str],
    new_name: Optional[str] = None,
    new_value: Optional[str] = None,
) -> bool:
    """Change the key and/or value of a mapping item, keeping its formatting.

    Mutates the document's token view. Returns True when every requested
    change was applied. Stops at the first change that cannot be applied,
    so a rename may already be in place when False is returned.
    """
    parent_path, key = path[:-1], path[-1]
    parent = document.get_in(parent_path)

    if not isinstance(parent, (MappingNode, SequenceNode)):
        return False

    pair = document.pair_in(parent, key) if isinstance(parent, MappingNode) else None
    if pair is None:
        return False

    key_node, value_node = pair
    in_flow = bool(parent.flow_style)

    if new_name:
        if not document.set_scalar(key_node, new_name, in_flow=in_flow):
            return False

    if new_value:
        # Only scalar values are substituted. Rewriting an alias would either
        # change the shared anchor or detach the alias from it.
        if not document.set_scalar(value_node, new_value, in_flow=in_flow):
            return False

    return True

def update_catalog_dependency(
    file_content: str,
    upgrade: CatalogUpgrade,
    options: Optional[Options] = None,
    file_path: Optional[str] = None,
) -> Optional[str]:
    """Update a dependency version in a `catalog` or `catalogs` section.

    The text is parsed into a structural view, used to validate and query
    the catalogs, and a token view, used to rewrite only the tokens that
    change.

    Args:
        file_content: Raw YAML text of the workspace file.
        upgrade: Key path and new version.
        options: Host options (debug output, error reporter).
        file_path: Path of the file, used in error messages.

    Returns:
        Optional[str]: The updated text; `file_content` itself when the
        dependency already has the new version; None when the path is not a
        catalog path, the document is not catalog-shaped, or the entry cannot
        be safely rewritten (missing, alias, non-scalar).

    Raises:
        CatalogSyntaxError: If the YAML is malformed.
    """
    path = upgrade.path
    debug = options is not None and options.debug

    if not is_catalog_path(path):
        if debug:
            print(f"Debug: {'.'.join(path)} is not a catalog path")
        return None

    document, config = CatalogParser.parse(file_content, options=options, file_path=file_path)
    if config is None:
        return None

    if current_version(config, path) == upgrade.new_value:
        if debug:
            print(f"Debug: {upgrade.name} is already at {upgrade.new_value}")
        return file_content

    if not change_dependency_in(document, path, new_name=upgrade.name, new_value=upgrade.new_value):
        if debug:
            print(f"Debug: Unable to substitute {'.'.join(path)}")
        return None

    return document.render()
