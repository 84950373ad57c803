"""YAML catalog parser."""
from typing import Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError

from .document import CatalogDocument
from .schema import CatalogsConfig
from ..options import Options

CATALOG_KEYS = ("catalog", "catalogs")

class CatalogSyntaxError(ValueError):
    """Raised when a workspace file is not well-formed YAML."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message)
        self.file_path = file_path

def is_catalog_path(path: Sequence[str]) -> bool:
    """Check that a key path points into a `catalog` or `catalogs` section."""
    return len(path) > 1 and path[0] in CATALOG_KEYS

def syntax_error(error: Exception, options: Optional[Options] = None, file_path: Optional[str] = None) -> CatalogSyntaxError:
    """Build the user-facing syntax error, reporting it through `options` first."""
    target = f" in {file_path}" if file_path else ""
    message = f"Invalid YAML syntax{target}. Unable to read catalog dependencies.\n{error}"
    if options is not None:
        options.report_error(message)
    return CatalogSyntaxError(message, file_path=file_path)

class CatalogParser:
    """Parser for workspace files holding dependency catalogs."""

    @staticmethod
    def parse(
        file_content: str,
        options: Optional[Options] = None,
        file_path: Optional[str] = None,
    ) -> Tuple[CatalogDocument, Optional[CatalogsConfig]]:
        """Parse and validate workspace file contents.

        Args:
            file_content: Raw YAML text.
            options: Host options (debug output, error reporter).
            file_path: Path of the file, used in error messages.

        Returns:
            Tuple[CatalogDocument, Optional[CatalogsConfig]]: The parsed document
            and its validated catalogs, or None in place of the catalogs when
            the document does not have the catalog shape.

        Raises:
            CatalogSyntaxError: If the YAML is malformed.
        """
        try:
            document = CatalogDocument.from_text(file_content)
            contents = document.to_plain()
        except yaml.YAMLError as e:
            raise syntax_error(e, options=options, file_path=file_path) from e

        try:
            config = CatalogsConfig.model_validate(contents)
        except ValidationError as e:
            if options is not None and options.debug:
                print(f"Debug: {file_path or 'document'} is not catalog-shaped: {e.error_count()} validation error(s)")
            return document, None

        return document, config
