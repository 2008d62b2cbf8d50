"""Library Service - orchestrates the catalog and its persistence."""

import logging
from typing import Dict, List, Optional

from bookkeep.core import BookFormat, Catalog, Genre, LibraryItem, ReadingState
from bookkeep.io import CatalogStore

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    ("The Hobbit", "J.R.R. Tolkien", 1937, 310, Genre.FANTASY, BookFormat.PHYSICAL),
    ("1984", "George Orwell", 1949, 328, Genre.FICTION, BookFormat.DIGITAL),
    ("To Kill a Mockingbird", "Harper Lee", 1960, 281, Genre.FICTION, BookFormat.PHYSICAL),
    ("The Catcher in the Rye", "J.D. Salinger", 1951, 277, Genre.FICTION, BookFormat.PHYSICAL),
    ("Brave New World", "Aldous Huxley", 1932, 268, Genre.FICTION, BookFormat.DIGITAL),
    ("Moby-Dick", "Herman Melville", 1851, 585, Genre.FICTION, BookFormat.PHYSICAL),
]

SAMPLE_SHELVES = {
    "Fiction Classics": Genre.FICTION,
    "Fantasy Adventures": Genre.FANTASY,
}


class LibraryService:
    """Application service for the user's library.

    Depends on CatalogStore for persistence. Callers (menus, forms) work with
    ``catalog`` directly and call ``save`` when they want changes kept.
    """

    def __init__(self, store: CatalogStore, catalog: Optional[Catalog] = None) -> None:
        self._store = store
        self.catalog = catalog if catalog is not None else Catalog()

    def open(self) -> Catalog:
        """Load the library from the store. Never raises; see CatalogStore.load."""
        self.catalog = self._store.load()
        return self.catalog

    def save(self) -> None:
        self._store.save(self.catalog)

    def seed_sample_library(self) -> List[LibraryItem]:
        """Add a handful of classics and two genre shelves. Returns the added books."""
        added = []
        for title, author, year, pages, genre, book_format in SAMPLE_BOOKS:
            item = LibraryItem.owned(title, author, year, pages, genre, book_format)
            self.catalog.add_item(item)
            added.append(item)

        for shelf_name, genre in SAMPLE_SHELVES.items():
            if shelf_name not in self.catalog.shelf_names():
                self.catalog.add_shelf(shelf_name)
            for item in added:
                if item.genre is genre:
                    self.catalog.add_item_to_shelf(shelf_name, item)

        logger.info("Seeded sample library with %d books", len(added))
        return added

    def reading_summary(self) -> Dict[str, int]:
        """Number of owned books per reading state name."""
        return {
            state.display_name: len(self.catalog.items_by_state(state))
            for state in ReadingState
        }

    def currently_reading(self) -> List[LibraryItem]:
        return self.catalog.items_by_state(ReadingState.IN_PROGRESS)

    def wishlist(self) -> List[LibraryItem]:
        return [item for item in self.catalog.all_items() if not item.is_owned]
