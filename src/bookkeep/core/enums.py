"""Enumerations used across the domain layer."""

from enum import Enum


class EventKind(Enum):
    STARTED_READING = "started_reading"
    FINISHED_READING = "finished_reading"
    COMMENT = "comment"
    QUOTE = "quote"
    AFTERTHOUGHT = "afterthought"
    REVIEW = "review"


class Genre(Enum):
    FICTION = "fiction"
    NON_FICTION = "non_fiction"
    FANTASY = "fantasy"
    SCIENCE_FICTION = "science_fiction"
    MYSTERY = "mystery"
    BIOGRAPHY = "biography"
    HISTORY = "history"
    POETRY = "poetry"
    OTHER = "other"


class BookFormat(Enum):
    PHYSICAL = "physical"
    DIGITAL = "digital"
    AUDIO = "audio"


class ItemKind(Enum):
    """Capability tag: only OWNED items carry reading progress."""

    OWNED = "owned"
    WISHLIST = "wishlist"
