"""
Bookkeep - personal book tracking.

This package keeps track of:
- Owned books and their reading progress
- Reading history (started, finished, comments, quotes, afterthoughts)
- Reviews of finished books
- A wishlist and named shelves
"""

__version__ = "0.1.0"

# Make key components available at package level
from bookkeep.core import BookEvent, Catalog, EventLog, LibraryItem, ReadingState
from bookkeep.io import CatalogStore

__all__ = [
    "BookEvent",
    "Catalog",
    "CatalogStore",
    "EventLog",
    "LibraryItem",
    "ReadingState",
]
