"""Unit tests for EventLog."""

from datetime import datetime, timedelta, timezone

import pytest

from bookkeep.core import BookEvent, EventKind, EventLog

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def log():
    return EventLog()


def test_new_log_is_empty(log):
    assert len(log) == 0
    assert log.started_reading is None
    assert log.finished_reading is None
    assert log.current_review is None
    assert not log.has_review


def test_annotations_keep_insertion_order(log):
    log.append(BookEvent.comment("first", 1))
    log.append(BookEvent.quote("second", 2))
    log.append(BookEvent.afterthought("third", 3))

    assert [e.text for e in log.annotations()] == ["first", "second", "third"]


def test_subsets_filter_by_kind(log):
    log.append(BookEvent.comment("c1", 1))
    log.append(BookEvent.quote("q1", 2))
    log.append(BookEvent.comment("c2", 3))
    log.append(BookEvent.afterthought("a1", 4))

    assert [e.text for e in log.comments()] == ["c1", "c2"]
    assert [e.text for e in log.quotes()] == ["q1"]
    assert [e.text for e in log.afterthoughts()] == ["a1"]


def test_milestones_go_to_slots_not_sequence(log):
    started = BookEvent.started_reading()
    finished = BookEvent.finished_reading()
    log.append(started)
    log.append(finished)

    assert log.started_reading is started
    assert log.finished_reading is finished
    assert log.annotations() == []


def test_second_start_is_rejected(log):
    first = BookEvent.started_reading()
    log.append(first)

    with pytest.raises(ValueError):
        log.append(BookEvent.started_reading())
    assert log.started_reading is first


def test_append_review_is_rejected(log):
    with pytest.raises(ValueError, match="set_review"):
        log.append(BookEvent.review("nope", 3))
    assert log.current_review is None


def test_set_review_replaces_previous(log):
    log.set_review(BookEvent.review("old", 2))
    log.set_review(BookEvent.review("new", 4))

    assert log.current_review.text == "new"
    assert log.current_review.rating == 4
    assert log.annotations() == []


def test_set_review_requires_review_event(log):
    with pytest.raises(ValueError):
        log.set_review(BookEvent.comment("not a review", 1))


def test_sort_chronological_is_stable(log):
    late = BookEvent.comment("late", 1, at=T0 + timedelta(hours=2))
    tie_a = BookEvent.quote("tie a", 2, at=T0 + timedelta(hours=1))
    tie_b = BookEvent.comment("tie b", 3, at=T0 + timedelta(hours=1))
    early = BookEvent.afterthought("early", 4, at=T0)
    for event in (late, tie_a, tie_b, early):
        log.append(event)

    log.sort_chronological()

    assert [e.text for e in log.annotations()] == ["early", "tie a", "tie b", "late"]


class TestReadingDuration:
    """Duration depends on which milestone slots are filled."""

    def test_zero_when_not_started(self, log):
        assert log.reading_duration() == timedelta(0)

    def test_runs_until_now_when_in_progress(self, log):
        log.append(BookEvent.started_reading(at=T0))

        assert log.reading_duration(now=T0 + timedelta(days=3)) == timedelta(days=3)
        assert log.reading_duration(now=T0 + timedelta(days=4)) == timedelta(days=4)

    def test_fixed_once_finished(self, log):
        log.append(BookEvent.started_reading(at=T0))
        log.append(BookEvent.finished_reading(at=T0 + timedelta(days=10)))

        assert log.reading_duration(now=T0 + timedelta(days=99)) == timedelta(days=10)


def test_restore_rebuilds_every_part():
    started = BookEvent.started_reading(at=T0)
    review = BookEvent.review("fine", 3)
    log = EventLog.restore(
        annotations=[BookEvent.comment("c", 1)],
        started_reading=started,
        review=review,
    )

    assert log.started_reading is started
    assert log.finished_reading is None
    assert log.current_review is review
    assert [e.kind for e in log.annotations()] == [EventKind.COMMENT]


def test_restore_rejects_milestone_as_annotation():
    with pytest.raises(ValueError):
        EventLog.restore(annotations=[BookEvent.started_reading()])
