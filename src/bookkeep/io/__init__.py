"""I/O layer - persistence of the catalog."""

from .catalog_serializer import catalog_from_dict, catalog_to_dict
from .catalog_store import CatalogStore

__all__ = ["CatalogStore", "catalog_from_dict", "catalog_to_dict"]
