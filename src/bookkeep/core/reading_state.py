"""Reading-progress state machine.

Each reading state is an enum member; what an operation does in a given state
is looked up in a single dispatch table keyed by ``(state, operation)``. The
table is checked for completeness when this module is imported.

Handlers receive the owning item and act on its reading-progress record, so
no state keeps a reference back to its item.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

from .book_event import BookEvent
from .errors import IllegalTransition, ValidationError

if TYPE_CHECKING:
    from .library_item import LibraryItem

logger = logging.getLogger(__name__)

OVERRIDE_MARKER = "_OVERRIDE_"


class ReadingState(Enum):
    """Reading phase of an owned book. Values are the stable display names."""

    NOT_STARTED = "NotStartedState"
    IN_PROGRESS = "InProgressState"
    FINISHED = "FinishedState"

    @property
    def display_name(self) -> str:
        return self.value


class Operation(Enum):
    START = "start"
    STOP = "stop"
    CHANGE_STATE = "change_state"
    COMMENT = "comment"
    QUOTE = "quote"
    REVIEW = "review"
    INCREMENT_PAGE = "increment_page"
    DURATION = "duration"


Handler = Callable[..., Any]


def _reject(message: str) -> Handler:
    def handler(item: LibraryItem, *args: Any, **kwargs: Any) -> None:
        raise IllegalTransition(message)

    handler.rejects = True
    return handler


def _move(item: LibraryItem, target: ReadingState) -> None:
    progress = item.progress
    logger.debug(
        "%s: %s -> %s", item.title, progress.state.display_name, target.display_name
    )
    progress.state = target


# NotStarted

def _start(item: LibraryItem, at: Optional[datetime] = None) -> None:
    item.progress.history.append(BookEvent.started_reading(at))
    _move(item, ReadingState.IN_PROGRESS)


def _no_duration(item: LibraryItem, now: Optional[datetime] = None) -> timedelta:
    return timedelta(0)


# InProgress

def _stop(item: LibraryItem, at: Optional[datetime] = None) -> None:
    item.progress.history.append(BookEvent.finished_reading(at))
    _move(item, ReadingState.FINISHED)


def _comment(item: LibraryItem, text: str, at: Optional[datetime] = None) -> None:
    progress = item.progress
    progress.history.append(BookEvent.comment(text, progress.current_page, at))


def _increment_page(item: LibraryItem, delta: int) -> None:
    if not isinstance(delta, int) or isinstance(delta, bool):
        raise ValidationError(f"Page increment must be an integer, got {delta!r}")
    # Bounds are enforced by the item's page setter.
    item.set_current_page(item.progress.current_page + delta)


def _running_duration(item: LibraryItem, now: Optional[datetime] = None) -> timedelta:
    return item.progress.history.reading_duration(now)


# InProgress and Finished

def _quote(item: LibraryItem, text: str, page: int, at: Optional[datetime] = None) -> None:
    item.progress.history.append(BookEvent.quote(text, page, at))


# Finished

def _afterthought(item: LibraryItem, text: str, at: Optional[datetime] = None) -> None:
    progress = item.progress
    progress.history.append(BookEvent.afterthought(text, progress.current_page, at))


def _review(item: LibraryItem, text: str, rating: int, at: Optional[datetime] = None) -> None:
    history = item.progress.history
    event = BookEvent.review(text, rating, at)
    if history.has_review:
        # Signals that this review supersedes an earlier one.
        event = BookEvent.review(
            f"{OVERRIDE_MARKER}{text}{OVERRIDE_MARKER}", rating, event.timestamp
        )
    history.set_review(event)


def _fixed_duration(item: LibraryItem, now: Optional[datetime] = None) -> timedelta:
    history = item.progress.history
    return history.finished_reading.timestamp - history.started_reading.timestamp


def _stay(item: LibraryItem, at: Optional[datetime] = None) -> None:
    pass


_S = ReadingState
_O = Operation

TRANSITIONS: Dict[Tuple[ReadingState, Operation], Handler] = {
    (_S.NOT_STARTED, _O.START): _start,
    (_S.NOT_STARTED, _O.STOP): _reject("Cannot stop a book that has not been started"),
    (_S.NOT_STARTED, _O.CHANGE_STATE): _start,
    (_S.NOT_STARTED, _O.COMMENT): _reject("Cannot comment on a book that has not been started"),
    (_S.NOT_STARTED, _O.QUOTE): _reject("Cannot quote a book that has not been started"),
    (_S.NOT_STARTED, _O.REVIEW): _reject("Cannot review an unfinished book"),
    (_S.NOT_STARTED, _O.INCREMENT_PAGE): _reject(
        "Cannot increment the page of a book that has not been started"
    ),
    (_S.NOT_STARTED, _O.DURATION): _no_duration,

    (_S.IN_PROGRESS, _O.START): _reject("Book is already being read"),
    (_S.IN_PROGRESS, _O.STOP): _stop,
    (_S.IN_PROGRESS, _O.CHANGE_STATE): _stop,
    (_S.IN_PROGRESS, _O.COMMENT): _comment,
    (_S.IN_PROGRESS, _O.QUOTE): _quote,
    (_S.IN_PROGRESS, _O.REVIEW): _reject("Cannot review an unfinished book"),
    (_S.IN_PROGRESS, _O.INCREMENT_PAGE): _increment_page,
    (_S.IN_PROGRESS, _O.DURATION): _running_duration,

    (_S.FINISHED, _O.START): _reject("Re-reading a finished book is not supported"),
    (_S.FINISHED, _O.STOP): _reject("Book is already finished"),
    (_S.FINISHED, _O.CHANGE_STATE): _stay,
    (_S.FINISHED, _O.COMMENT): _afterthought,
    (_S.FINISHED, _O.QUOTE): _quote,
    (_S.FINISHED, _O.REVIEW): _review,
    (_S.FINISHED, _O.INCREMENT_PAGE): _reject("Cannot increment the page of a finished book"),
    (_S.FINISHED, _O.DURATION): _fixed_duration,
}


def _check_complete() -> None:
    missing = [
        (state.name, operation.name)
        for state in ReadingState
        for operation in Operation
        if (state, operation) not in TRANSITIONS
    ]
    if missing:
        raise RuntimeError(f"Reading state table is missing handlers for {missing}")


_check_complete()


def dispatch(operation: Operation, item: LibraryItem, *args: Any, **kwargs: Any) -> Any:
    """Run ``operation`` for ``item`` according to its current state."""
    handler = TRANSITIONS[(item.progress.state, operation)]
    return handler(item, *args, **kwargs)


def is_allowed(state: ReadingState, operation: Operation) -> bool:
    """Whether ``operation`` is legal in ``state`` (used by menus to grey out actions)."""
    return not getattr(TRANSITIONS[(state, operation)], "rejects", False)
