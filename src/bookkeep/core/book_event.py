"""BookEvent entity - one immutable occurrence in a book's history."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .enums import EventKind
from .errors import InvalidEvent

LOWEST_RATING = 0
HIGHEST_RATING = 5

_TEXT_KINDS = frozenset(
    {EventKind.COMMENT, EventKind.QUOTE, EventKind.AFTERTHOUGHT, EventKind.REVIEW}
)
_PAGE_KINDS = frozenset({EventKind.COMMENT, EventKind.QUOTE, EventKind.AFTERTHOUGHT})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class BookEvent:
    """Represents an event in a book's history.

    Which fields are meaningful depends on the kind:

    Attributes:
        kind: What happened (started, finished, comment, quote, afterthought, review).
        text: Annotation text. Required for COMMENT, QUOTE, AFTERTHOUGHT and REVIEW,
            forbidden otherwise.
        page: Page the annotation refers to. Only for COMMENT, QUOTE and
            AFTERTHOUGHT; defaults to 0 for those kinds when omitted.
        rating: Score from 0 to 5. Required for REVIEW, forbidden otherwise.
        timestamp: When the event occurred. Defaults to now (UTC).

    Raises:
        InvalidEvent: if the fields do not fit the kind.
    """

    kind: EventKind
    text: Optional[str] = None
    page: Optional[int] = None
    rating: Optional[int] = None
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, EventKind):
            raise InvalidEvent(f"Unknown event kind: {self.kind!r}")
        self._validate_rating()
        self._validate_text()
        self._validate_page()
        self._validate_timestamp()

    def _validate_rating(self) -> None:
        if self.kind is not EventKind.REVIEW:
            if self.rating is not None:
                raise InvalidEvent(f"Rating cannot be set for {self.kind.name} events")
            return
        if self.rating is None or isinstance(self.rating, bool):
            raise InvalidEvent("A review needs a rating")
        if not isinstance(self.rating, int):
            raise InvalidEvent(f"Rating must be an integer, got {self.rating!r}")
        if not LOWEST_RATING <= self.rating <= HIGHEST_RATING:
            raise InvalidEvent(
                f"Rating has to be between {LOWEST_RATING} and {HIGHEST_RATING}, got {self.rating}"
            )

    def _validate_text(self) -> None:
        if self.kind in _TEXT_KINDS:
            if self.text is None or not self.text.strip():
                raise InvalidEvent(f"{self.kind.name} text cannot be empty")
        elif self.text is not None:
            raise InvalidEvent(f"Text cannot be set for {self.kind.name} events")

    def _validate_page(self) -> None:
        if self.kind not in _PAGE_KINDS:
            if self.page is not None:
                raise InvalidEvent(f"Page number cannot be set for {self.kind.name} events")
            return
        if self.page is None:
            object.__setattr__(self, "page", 0)
        elif not _is_int(self.page):
            raise InvalidEvent(f"Page number must be an integer, got {self.page!r}")
        elif self.page < 0:
            raise InvalidEvent(f"Page number must be non-negative, got {self.page}")

    def _validate_timestamp(self) -> None:
        if not isinstance(self.timestamp, datetime):
            raise InvalidEvent(f"Timestamp must be a datetime, got {self.timestamp!r}")
        if self.timestamp.tzinfo is None or self.timestamp.utcoffset() is None:
            raise InvalidEvent("Timestamp must be timezone-aware")

    # Named constructors

    @classmethod
    def started_reading(cls, at: Optional[datetime] = None) -> "BookEvent":
        return cls._build(EventKind.STARTED_READING, at)

    @classmethod
    def finished_reading(cls, at: Optional[datetime] = None) -> "BookEvent":
        return cls._build(EventKind.FINISHED_READING, at)

    @classmethod
    def comment(cls, text: str, page: int = 0, at: Optional[datetime] = None) -> "BookEvent":
        return cls._build(EventKind.COMMENT, at, text=text, page=page)

    @classmethod
    def quote(cls, text: str, page: int = 0, at: Optional[datetime] = None) -> "BookEvent":
        return cls._build(EventKind.QUOTE, at, text=text, page=page)

    @classmethod
    def afterthought(cls, text: str, page: int = 0, at: Optional[datetime] = None) -> "BookEvent":
        return cls._build(EventKind.AFTERTHOUGHT, at, text=text, page=page)

    @classmethod
    def review(cls, text: str, rating: int, at: Optional[datetime] = None) -> "BookEvent":
        return cls._build(EventKind.REVIEW, at, text=text, rating=rating)

    @classmethod
    def _build(cls, kind: EventKind, at: Optional[datetime], **fields) -> "BookEvent":
        if at is None:
            return cls(kind=kind, **fields)
        return cls(kind=kind, timestamp=at, **fields)

    @property
    def is_annotation(self) -> bool:
        """True for events kept in the ordered annotation sequence."""
        return self.kind in _PAGE_KINDS

    def __str__(self) -> str:
        stamp = self.timestamp.strftime("%Y-%m-%d %H:%M")
        if self.kind is EventKind.REVIEW:
            return f"[{stamp}] {self.rating}/{HIGHEST_RATING}: {self.text}"
        if self.is_annotation:
            return f"[{stamp}] p.{self.page} {self.kind.name.lower()}: {self.text}"
        return f"[{stamp}] {self.kind.name.lower().replace('_', ' ')}"
