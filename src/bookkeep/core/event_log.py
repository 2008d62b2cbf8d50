"""EventLog - per-book ordered history plus start/finish/review slots."""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from .book_event import BookEvent, utc_now
from .enums import EventKind


class EventLog:
    """Acts as the single owner of one book's history.

    Comments, quotes and afterthoughts go into an ordered sequence. Starting
    and finishing are single slots, filled once each. The review is a single
    slot that is replaced, never appended.
    """

    def __init__(self) -> None:
        self._annotations: List[BookEvent] = []
        self._started_reading: Optional[BookEvent] = None
        self._finished_reading: Optional[BookEvent] = None
        self._review: Optional[BookEvent] = None

    @classmethod
    def restore(
        cls,
        annotations: Iterable[BookEvent] = (),
        started_reading: Optional[BookEvent] = None,
        finished_reading: Optional[BookEvent] = None,
        review: Optional[BookEvent] = None,
    ) -> "EventLog":
        """Rebuild a log from persisted parts, routing each through the normal checks."""
        log = cls()
        if started_reading is not None:
            log.append(started_reading)
        if finished_reading is not None:
            log.append(finished_reading)
        for event in annotations:
            if not event.is_annotation:
                raise ValueError(f"{event.kind.name} is not an annotation event")
            log.append(event)
        if review is not None:
            log.set_review(review)
        return log

    def append(self, event: BookEvent) -> None:
        """Record an event.

        Raises:
            ValueError: for REVIEW events (use set_review) or when the
                started/finished slot is already filled.
        """
        if event.is_annotation:
            self._annotations.append(event)
        elif event.kind is EventKind.STARTED_READING:
            if self._started_reading is not None:
                raise ValueError("Started reading has already been recorded")
            self._started_reading = event
        elif event.kind is EventKind.FINISHED_READING:
            if self._finished_reading is not None:
                raise ValueError("Finished reading has already been recorded")
            self._finished_reading = event
        elif event.kind is EventKind.REVIEW:
            raise ValueError("Reviews should not be added through append, use set_review")

    def set_review(self, event: BookEvent) -> None:
        """Replace the current review. Previous reviews are not kept."""
        if event.kind is not EventKind.REVIEW:
            raise ValueError(f"Expected a REVIEW event, got {event.kind.name}")
        self._review = event

    @property
    def started_reading(self) -> Optional[BookEvent]:
        return self._started_reading

    @property
    def finished_reading(self) -> Optional[BookEvent]:
        return self._finished_reading

    @property
    def current_review(self) -> Optional[BookEvent]:
        return self._review

    @property
    def has_review(self) -> bool:
        return self._review is not None

    def annotations(self) -> List[BookEvent]:
        return list(self._annotations)

    def comments(self) -> List[BookEvent]:
        return self._subset(EventKind.COMMENT)

    def quotes(self) -> List[BookEvent]:
        return self._subset(EventKind.QUOTE)

    def afterthoughts(self) -> List[BookEvent]:
        return self._subset(EventKind.AFTERTHOUGHT)

    def _subset(self, kind: EventKind) -> List[BookEvent]:
        return [event for event in self._annotations if event.kind is kind]

    def sort_chronological(self) -> None:
        """Reorder annotations by timestamp, keeping insertion order for ties."""
        self._annotations.sort(key=lambda event: event.timestamp)

    def reading_duration(self, now: Optional[datetime] = None) -> timedelta:
        if self._started_reading is None:
            return timedelta(0)
        started = self._started_reading.timestamp
        if self._finished_reading is None:
            return (now or utc_now()) - started
        return self._finished_reading.timestamp - started

    def __len__(self) -> int:
        return len(self._annotations)

    def __repr__(self) -> str:
        return (
            f"EventLog(annotations={len(self._annotations)}, "
            f"started={self._started_reading is not None}, "
            f"finished={self._finished_reading is not None}, "
            f"review={self._review is not None})"
        )
