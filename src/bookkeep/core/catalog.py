"""Catalog - keyed collection of library items and named shelves."""

from dataclasses import dataclass, field
from typing import Dict, List, Union
from uuid import UUID

from .errors import NotFoundError, ValidationError
from .library_item import LibraryItem
from .reading_state import ReadingState

ItemRef = Union[LibraryItem, UUID]


def _item_id(ref: ItemRef) -> UUID:
    return ref.id if isinstance(ref, LibraryItem) else ref


@dataclass
class Shelf:
    """Named, non-owning grouping of item ids."""

    name: str
    item_ids: List[UUID] = field(default_factory=list)

    def add(self, item_id: UUID) -> None:
        if item_id not in self.item_ids:
            self.item_ids.append(item_id)

    def discard(self, item_id: UUID) -> None:
        if item_id in self.item_ids:
            self.item_ids.remove(item_id)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.item_ids

    def __len__(self) -> int:
        return len(self.item_ids)


class Catalog:
    """Stores items by id and groups them into shelves.

    No reading rules live here. Removing an item leaves any shelf references
    to it in place; they are skipped when a shelf is listed and can be
    dropped with ``prune_shelves`` or ``remove_item(..., prune_shelves=True)``.
    """

    def __init__(self) -> None:
        self._items: Dict[UUID, LibraryItem] = {}
        self._shelves: Dict[str, Shelf] = {}

    # Items

    def add_item(self, item: LibraryItem) -> None:
        self._items[item.id] = item

    def remove_item(self, ref: ItemRef, prune_shelves: bool = False) -> LibraryItem:
        """Remove an item and return it.

        Raises:
            NotFoundError: if the item is not in the catalog.
        """
        item_id = _item_id(ref)
        item = self._items.pop(item_id, None)
        if item is None:
            raise NotFoundError(f"No item with id {item_id}")
        if prune_shelves:
            for shelf in self._shelves.values():
                shelf.discard(item_id)
        return item

    def get_item(self, item_id: UUID) -> LibraryItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise NotFoundError(f"No item with id {item_id}") from None

    def all_items(self) -> List[LibraryItem]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, ref: object) -> bool:
        if isinstance(ref, (LibraryItem, UUID)):
            return _item_id(ref) in self._items
        return False

    # Shelves

    def add_shelf(self, name: str) -> Shelf:
        if not name or not name.strip():
            raise ValidationError("Shelf name is required")
        if name in self._shelves:
            raise ValidationError(f"Shelf '{name}' already exists")
        shelf = Shelf(name)
        self._shelves[name] = shelf
        return shelf

    def remove_shelf(self, name: str) -> None:
        self._get_shelf(name)
        del self._shelves[name]

    def shelf_names(self) -> List[str]:
        return list(self._shelves)

    def add_item_to_shelf(self, shelf_name: str, ref: ItemRef) -> None:
        """Put an item on a shelf.

        An item object that is not yet in the catalog is added to it first.

        Raises:
            NotFoundError: if the shelf does not exist, or ``ref`` is a bare id
                that is not in the catalog.
        """
        shelf = self._get_shelf(shelf_name)
        if isinstance(ref, LibraryItem):
            if ref.id not in self._items:
                self.add_item(ref)
        elif ref not in self._items:
            raise NotFoundError(f"No item with id {ref}")
        shelf.add(_item_id(ref))

    def remove_item_from_shelf(self, shelf_name: str, ref: ItemRef) -> None:
        self._get_shelf(shelf_name).discard(_item_id(ref))

    def items_on_shelf(self, shelf_name: str) -> List[LibraryItem]:
        shelf = self._get_shelf(shelf_name)
        return [self._items[item_id] for item_id in shelf.item_ids if item_id in self._items]

    def shelf_ids(self, shelf_name: str) -> List[UUID]:
        """Raw ids on a shelf, including ids of items no longer in the catalog."""
        return list(self._get_shelf(shelf_name).item_ids)

    def prune_shelves(self) -> int:
        """Drop shelf references to removed items. Returns how many were dropped."""
        dropped = 0
        for shelf in self._shelves.values():
            stale = [item_id for item_id in shelf.item_ids if item_id not in self._items]
            for item_id in stale:
                shelf.discard(item_id)
            dropped += len(stale)
        return dropped

    def _get_shelf(self, name: str) -> Shelf:
        shelf = self._shelves.get(name)
        if shelf is None:
            raise NotFoundError(f"Shelf '{name}' not found")
        return shelf

    # Filters

    def items_by_author(self, author: str) -> List[LibraryItem]:
        needle = author.lower()
        return [item for item in self._items.values() if needle in item.author.lower()]

    def item_by_title(self, title: str) -> LibraryItem:
        # Assumes titles are unique; the first match wins.
        for item in self._items.values():
            if item.title == title:
                return item
        raise NotFoundError(f"Book title not found: {title}")

    def items_by_year(self, year: int) -> List[LibraryItem]:
        return [item for item in self._items.values() if item.publication_year == year]

    def items_by_year_range(self, start_year: int, end_year: int) -> List[LibraryItem]:
        """Items published from ``start_year`` up to, but not including, ``end_year``."""
        items: List[LibraryItem] = []
        for year in range(start_year, end_year):
            items.extend(self.items_by_year(year))
        return items

    def items_by_state(self, state: ReadingState) -> List[LibraryItem]:
        return [
            item for item in self._items.values() if item.is_owned and item.state is state
        ]

    def shelves_of(self, ref: ItemRef) -> List[str]:
        """Names of the shelves holding an item."""
        item_id = _item_id(ref)
        return [name for name, shelf in self._shelves.items() if item_id in shelf]
