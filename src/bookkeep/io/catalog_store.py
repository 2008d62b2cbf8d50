"""File-based catalog persistence."""

import json
import logging
from pathlib import Path

from bookkeep.core import Catalog

from .catalog_serializer import catalog_from_dict, catalog_to_dict

logger = logging.getLogger(__name__)


class CatalogStore:
    """Saves and loads a whole catalog as one JSON document.

    Loading never fails: a missing, unreadable or invalid file yields an
    empty catalog so the application can always start. Saving propagates
    OSError to the caller.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def save(self, catalog: Catalog) -> None:
        """Write the catalog, replacing the previous file atomically.

        Raises:
            OSError: if the file cannot be written.
        """
        data = catalog_to_dict(catalog)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError:
            logger.error("Failed to save library to %s", self.path, exc_info=True)
            raise
        logger.info("Saved %d books to %s", len(catalog), self.path)

    def load(self) -> Catalog:
        """Read the catalog, falling back to an empty one on any failure."""
        if not self.path.exists():
            logger.info("No library file at %s, starting empty", self.path)
            return Catalog()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            catalog = catalog_from_dict(data)
        except Exception as e:
            logger.warning(
                "Could not load library from %s, starting empty: %s", self.path, e, exc_info=True
            )
            return Catalog()

        logger.info("Loaded %d books from %s", len(catalog), self.path)
        return catalog
