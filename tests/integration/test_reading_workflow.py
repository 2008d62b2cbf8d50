#!/usr/bin/env python3
"""
Integration test for the full reading lifecycle of one book.

1. Create a 300 page book → not started, page 0
2. Start reading → in progress, one start event
3. Read 50 pages and save a quote
4. Stop reading → finished, one finish event, duration fixed
5. Review, then review again → second review marked as override
6. Save and reload the library → everything is still there
"""

from datetime import datetime, timedelta, timezone

from bookkeep.core import OVERRIDE_MARKER, Catalog, LibraryItem, ReadingState
from bookkeep.io import CatalogStore

T0 = datetime(2024, 6, 1, 20, 0, tzinfo=timezone.utc)


def test_full_reading_lifecycle(tmp_path):
    book = LibraryItem.owned("Test Book", "Test Author", 2021, page_count=300)
    assert book.state_name() == "NotStartedState"
    assert book.current_page_number() == 0

    book.start_reading(at=T0)
    assert book.state_name() == "InProgressState"
    assert book.history.started_reading is not None

    book.increment_page(50)
    assert book.current_page_number() == 50

    book.add_quote("nice", 50)
    assert len(book.history.quotes()) == 1

    book.stop_reading(at=T0 + timedelta(days=5))
    assert book.state_name() == "FinishedState"
    assert book.history.finished_reading is not None
    duration = book.reading_duration()
    assert duration == timedelta(days=5)
    assert book.reading_duration() == duration

    book.review("Great", 5)
    assert book.history.current_review.text == "Great"
    assert book.history.current_review.rating == 5

    book.review("Better", 4)
    assert OVERRIDE_MARKER in book.history.current_review.text
    assert book.history.current_review.rating == 4

    book.change_state()
    assert book.state is ReadingState.FINISHED

    catalog = Catalog()
    catalog.add_shelf("Read this year")
    catalog.add_item_to_shelf("Read this year", book)
    store = CatalogStore(tmp_path / "library.json")
    store.save(catalog)

    reloaded = store.load().items_on_shelf("Read this year")[0]
    assert reloaded.id == book.id
    assert reloaded.state is ReadingState.FINISHED
    assert reloaded.current_page_number() == 50
    assert reloaded.reading_duration() == duration
    assert reloaded.history.current_review.text == book.history.current_review.text
