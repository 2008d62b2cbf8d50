"""Domain layer - books, their reading state and history, and the catalog."""

from .book_event import BookEvent
from .catalog import Catalog, Shelf
from .enums import BookFormat, EventKind, Genre, ItemKind
from .errors import (
    BookkeepError,
    IllegalTransition,
    InvalidEvent,
    NotFoundError,
    UnsupportedCapability,
    ValidationError,
)
from .event_log import EventLog
from .library_item import LibraryItem, ReadingProgress
from .reading_state import OVERRIDE_MARKER, Operation, ReadingState

__all__ = [
    "BookEvent",
    "BookFormat",
    "BookkeepError",
    "Catalog",
    "EventKind",
    "EventLog",
    "Genre",
    "IllegalTransition",
    "InvalidEvent",
    "ItemKind",
    "LibraryItem",
    "NotFoundError",
    "OVERRIDE_MARKER",
    "Operation",
    "ReadingProgress",
    "ReadingState",
    "Shelf",
    "UnsupportedCapability",
    "ValidationError",
]
