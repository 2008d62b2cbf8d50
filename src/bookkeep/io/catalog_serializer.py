"""Conversion between a Catalog and plain JSON-compatible dicts."""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from bookkeep.core import (
    BookEvent,
    BookFormat,
    Catalog,
    EventKind,
    EventLog,
    Genre,
    ItemKind,
    LibraryItem,
    ReadingProgress,
    ReadingState,
)

FORMAT_VERSION = 1


def catalog_to_dict(catalog: Catalog) -> Dict[str, Any]:
    """Serialize a catalog.

    Format:
    {
        "version": 1,
        "items": [ {item}, ... ],
        "shelves": [ {"name": "...", "item_ids": ["<uuid>", ...]}, ... ]
    }
    """
    return {
        "version": FORMAT_VERSION,
        "items": [item_to_dict(item) for item in catalog.all_items()],
        "shelves": [
            {"name": name, "item_ids": [str(item_id) for item_id in catalog.shelf_ids(name)]}
            for name in catalog.shelf_names()
        ],
    }


def catalog_from_dict(data: Dict[str, Any]) -> Catalog:
    """Rebuild a catalog.

    Raises:
        ValueError: if the version is unsupported or a record is malformed.
        KeyError: if a required field is missing.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    version = data.get("version")
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported library format version: {version!r}")

    catalog = Catalog()
    for record in data.get("items", []):
        catalog.add_item(item_from_dict(record))
    for record in data.get("shelves", []):
        shelf = catalog.add_shelf(record["name"])
        # Ids of removed items are kept; the catalog skips them when listing.
        for raw_id in record.get("item_ids", []):
            shelf.add(UUID(raw_id))
    return catalog


def item_to_dict(item: LibraryItem) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": str(item.id),
        "kind": item.kind.value,
        "title": item.title,
        "author": item.author,
        "publication_year": item.publication_year,
        "page_count": item.page_count,
        "genre": item.genre.value if item.genre else None,
    }
    if item.is_owned:
        progress = item.progress
        history = progress.history
        data["progress"] = {
            "format": progress.format.value if progress.format else None,
            "state": progress.state.value,
            "current_page": progress.current_page,
            "started_reading": _event_to_dict(history.started_reading),
            "finished_reading": _event_to_dict(history.finished_reading),
            "review": _event_to_dict(history.current_review),
            "annotations": [_event_to_dict(event) for event in history.annotations()],
        }
    else:
        data["price"] = item.price
    return data


def item_from_dict(data: Dict[str, Any]) -> LibraryItem:
    kind = ItemKind(data["kind"])
    genre = Genre(data["genre"]) if data.get("genre") else None
    common = dict(
        id=UUID(data["id"]),
        title=data["title"],
        author=data["author"],
        publication_year=data.get("publication_year", 0),
        page_count=data.get("page_count", 0),
        genre=genre,
        kind=kind,
    )
    if kind is ItemKind.WISHLIST:
        return LibraryItem(price=data.get("price", 0), **common)

    raw = data["progress"]
    if not isinstance(raw, dict):
        raise ValueError(f"Owned book '{data['title']}' has no progress record")
    history = EventLog.restore(
        annotations=[_event_from_dict(event) for event in raw.get("annotations", [])],
        started_reading=_event_from_dict(raw.get("started_reading")),
        finished_reading=_event_from_dict(raw.get("finished_reading")),
        review=_event_from_dict(raw.get("review")),
    )
    progress = ReadingProgress(
        format=BookFormat(raw["format"]) if raw.get("format") else None,
        state=ReadingState(raw["state"]),
        current_page=raw.get("current_page", 0),
        history=history,
    )
    _check_state_matches_history(progress)
    return LibraryItem(progress=progress, **common)


def _check_state_matches_history(progress: ReadingProgress) -> None:
    history = progress.history
    expected = ReadingState.NOT_STARTED
    if history.started_reading is not None:
        expected = ReadingState.IN_PROGRESS
    if history.finished_reading is not None:
        if history.started_reading is None:
            raise ValueError("Finished reading recorded without a start")
        expected = ReadingState.FINISHED
    if progress.state is not expected:
        raise ValueError(
            f"State {progress.state.value} does not match recorded history ({expected.value})"
        )


def _event_to_dict(event: Optional[BookEvent]) -> Optional[Dict[str, Any]]:
    if event is None:
        return None
    return {
        "kind": event.kind.value,
        "text": event.text,
        "page": event.page,
        "rating": event.rating,
        "timestamp": event.timestamp.isoformat(),
    }


def _event_from_dict(data: Optional[Dict[str, Any]]) -> Optional[BookEvent]:
    if data is None:
        return None
    return BookEvent(
        kind=EventKind(data["kind"]),
        text=data.get("text"),
        page=data.get("page"),
        rating=data.get("rating"),
        timestamp=datetime.fromisoformat(data["timestamp"]),
    )
