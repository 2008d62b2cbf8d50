"""LibraryItem entity - a tracked book, either owned or on the wishlist."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from .enums import BookFormat, Genre, ItemKind
from .errors import UnsupportedCapability, ValidationError
from .event_log import EventLog
from .reading_state import Operation, ReadingState, dispatch


@dataclass
class ReadingProgress:
    """Reading-progress record carried only by owned items.

    The state machine acts on this record directly; the page bound is
    enforced by LibraryItem.set_current_page.
    """

    format: Optional[BookFormat] = None
    state: ReadingState = ReadingState.NOT_STARTED
    current_page: int = 0
    history: EventLog = field(default_factory=EventLog)


@dataclass(eq=False)
class LibraryItem:
    """Represents a book in the user's library.

    ``kind`` is the capability tag: OWNED items carry a ReadingProgress and
    support every reading operation, WISHLIST items carry a price and raise
    UnsupportedCapability for anything progress-related.

    Prefer the ``owned`` and ``wishlist`` factories over calling the
    constructor directly.

    Wishlist items still expose the reading methods so that callers can treat
    every item alike; each of them raises UnsupportedCapability. ``kind``,
    ``progress`` and ``id`` cannot be reassigned after construction.

    Attributes:
        title: Display title (required).
        author: Author name (required).
        publication_year: Year of first publication.
        page_count: Number of pages; upper bound for the current page.
        genre: Optional genre.
        kind: OWNED or WISHLIST.
        price: Wishlist price, None for owned items.
        progress: Reading progress, None for wishlist items.
        id: Unique identifier, generated at construction.
    """

    title: str
    author: str
    publication_year: int = 0
    page_count: int = 0
    genre: Optional[Genre] = None
    kind: ItemKind = ItemKind.OWNED
    price: Optional[int] = None
    progress: Optional[ReadingProgress] = None
    id: UUID = field(default_factory=uuid4)

    _FIXED_FIELDS = frozenset({"kind", "progress", "id"})

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Title is required")
        if not self.author or not self.author.strip():
            raise ValidationError("Author name is required")
        if self.page_count < 0:
            raise ValidationError(f"Page count must be non-negative, got {self.page_count}")

        if self.kind is ItemKind.OWNED:
            if self.price is not None:
                raise ValidationError("Owned books do not carry a price")
            if self.progress is None:
                self.progress = ReadingProgress()
            elif not 0 <= self.progress.current_page <= self.page_count:
                raise ValidationError(
                    f"Page {self.progress.current_page} doesn't exist in '{self.title}'"
                )
        else:
            if self.progress is not None:
                raise ValidationError("Wishlist books cannot carry reading progress")
            if self.price is None:
                self.price = 0
            elif self.price < 0:
                raise ValidationError(f"Price must be non-negative, got {self.price}")

        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: object) -> None:
        if name in self._FIXED_FIELDS and self.__dict__.get("_sealed", False):
            raise AttributeError(f"{name} cannot be changed after construction")
        super().__setattr__(name, value)

    @classmethod
    def owned(
        cls,
        title: str,
        author: str,
        publication_year: int = 0,
        page_count: int = 0,
        genre: Optional[Genre] = None,
        format: Optional[BookFormat] = None,
    ) -> "LibraryItem":
        """Create an owned book, not started, on page 0 with an empty history."""
        return cls(
            title=title,
            author=author,
            publication_year=publication_year,
            page_count=page_count,
            genre=genre,
            kind=ItemKind.OWNED,
            progress=ReadingProgress(format=format),
        )

    @classmethod
    def wishlist(
        cls,
        title: str,
        author: str,
        publication_year: int = 0,
        page_count: int = 0,
        genre: Optional[Genre] = None,
        price: int = 0,
    ) -> "LibraryItem":
        """Create a wishlist book. It has a price and no reading progress."""
        return cls(
            title=title,
            author=author,
            publication_year=publication_year,
            page_count=page_count,
            genre=genre,
            kind=ItemKind.WISHLIST,
            price=price,
        )

    @property
    def is_owned(self) -> bool:
        return self.kind is ItemKind.OWNED

    def _require_progress(self, operation: str) -> ReadingProgress:
        if self.progress is None:
            raise UnsupportedCapability(
                f"Wishlist book '{self.title}' does not support {operation}"
            )
        return self.progress

    # Reading operations

    def start_reading(self, at: Optional[datetime] = None) -> None:
        self._require_progress("start_reading")
        dispatch(Operation.START, self, at=at)

    def stop_reading(self, at: Optional[datetime] = None) -> None:
        self._require_progress("stop_reading")
        dispatch(Operation.STOP, self, at=at)

    def change_state(self, at: Optional[datetime] = None) -> None:
        """Advance to the next reading state; a finished book stays finished."""
        self._require_progress("change_state")
        dispatch(Operation.CHANGE_STATE, self, at=at)

    def add_comment(self, text: str, at: Optional[datetime] = None) -> None:
        """Comment at the current page. Becomes an afterthought once finished."""
        self._require_progress("add_comment")
        dispatch(Operation.COMMENT, self, text, at=at)

    def add_quote(self, text: str, page: int, at: Optional[datetime] = None) -> None:
        self._require_progress("add_quote")
        dispatch(Operation.QUOTE, self, text, page, at=at)

    def review(self, text: str, rating: int, at: Optional[datetime] = None) -> None:
        self._require_progress("review")
        dispatch(Operation.REVIEW, self, text, rating, at=at)

    def increment_page(self, delta: int) -> None:
        self._require_progress("increment_page")
        dispatch(Operation.INCREMENT_PAGE, self, delta)

    def reading_duration(self, now: Optional[datetime] = None) -> timedelta:
        self._require_progress("reading_duration")
        return dispatch(Operation.DURATION, self, now=now)

    # Progress accessors

    def current_page_number(self) -> int:
        return self._require_progress("current_page_number").current_page

    def set_current_page(self, page: int) -> None:
        """Set the current page directly. Prefer increment_page in application code.

        Raises:
            ValidationError: if the page lies outside [0, page_count].
        """
        progress = self._require_progress("set_current_page")
        if not isinstance(page, int) or isinstance(page, bool):
            raise ValidationError(f"Page must be an integer, got {page!r}")
        if not 0 <= page <= self.page_count:
            raise ValidationError(
                f"Page {page} doesn't exist in '{self.title}' ({self.page_count} pages)"
            )
        progress.current_page = page

    def progress_percent(self) -> float:
        progress = self._require_progress("progress_percent")
        if self.page_count == 0:
            return 0.0
        return round(100.0 * progress.current_page / self.page_count, 1)

    @property
    def state(self) -> ReadingState:
        return self._require_progress("state").state

    def state_name(self) -> str:
        return self.state.display_name

    @property
    def history(self) -> EventLog:
        return self._require_progress("history").history

    @property
    def format(self) -> Optional[BookFormat]:
        return self._require_progress("format").format

    def __str__(self) -> str:
        return f"{self.title} by {self.author} ({self.publication_year})"
