"""Unit tests for BookEvent construction and validation."""

from datetime import datetime, timezone

import pytest

from bookkeep.core import BookEvent, EventKind, InvalidEvent, ValidationError


class TestNamedConstructors:
    """Tests for the per-kind constructors."""

    def test_started_reading_has_timestamp_and_no_fields(self):
        event = BookEvent.started_reading()

        assert event.kind is EventKind.STARTED_READING
        assert event.timestamp is not None
        assert event.text is None
        assert event.page is None
        assert event.rating is None

    def test_finished_reading(self):
        assert BookEvent.finished_reading().kind is EventKind.FINISHED_READING

    def test_comment_keeps_text_and_page(self):
        event = BookEvent.comment("Slow start", 12)

        assert event.kind is EventKind.COMMENT
        assert event.text == "Slow start"
        assert event.page == 12

    def test_afterthought(self):
        event = BookEvent.afterthought("Still thinking about it", 300)
        assert event.kind is EventKind.AFTERTHOUGHT
        assert event.page == 300

    def test_review_keeps_rating(self):
        event = BookEvent.review("Loved it", 5)

        assert event.kind is EventKind.REVIEW
        assert event.rating == 5
        assert event.page is None

    def test_timestamp_can_be_overridden(self):
        at = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert BookEvent.quote("x", 1, at=at).timestamp == at

    def test_annotation_page_defaults_to_zero(self):
        assert BookEvent(EventKind.COMMENT, text="hi").page == 0


class TestValidation:
    """Construction rejects fields that do not fit the kind."""

    def test_empty_comment_text_fails(self):
        with pytest.raises(InvalidEvent):
            BookEvent(EventKind.COMMENT, text="", page=5)

    def test_whitespace_text_counts_as_empty(self):
        with pytest.raises(InvalidEvent):
            BookEvent.quote("   ", 3)

    @pytest.mark.parametrize(
        "kind", [EventKind.COMMENT, EventKind.QUOTE, EventKind.AFTERTHOUGHT]
    )
    def test_missing_text_fails(self, kind):
        with pytest.raises(InvalidEvent):
            BookEvent(kind, page=1)

    def test_rating_above_five_fails(self):
        with pytest.raises(InvalidEvent, match="Rating"):
            BookEvent(EventKind.REVIEW, text="ok", rating=6)

    def test_negative_rating_fails(self):
        with pytest.raises(InvalidEvent, match="Rating"):
            BookEvent.review("ok", -1)

    def test_rating_error_reported_even_with_empty_text(self):
        with pytest.raises(InvalidEvent, match="Rating"):
            BookEvent(EventKind.REVIEW, text="", rating=9)

    def test_review_without_rating_fails(self):
        with pytest.raises(InvalidEvent):
            BookEvent(EventKind.REVIEW, text="ok")

    def test_rating_forbidden_outside_review(self):
        with pytest.raises(InvalidEvent):
            BookEvent(EventKind.COMMENT, text="ok", rating=3)

    @pytest.mark.parametrize(
        "kind", [EventKind.STARTED_READING, EventKind.FINISHED_READING]
    )
    def test_page_forbidden_for_milestones(self, kind):
        with pytest.raises(InvalidEvent):
            BookEvent(kind, page=1)

    def test_page_forbidden_for_review(self):
        with pytest.raises(InvalidEvent):
            BookEvent(EventKind.REVIEW, text="ok", rating=4, page=10)

    def test_text_forbidden_for_milestones(self):
        with pytest.raises(InvalidEvent):
            BookEvent(EventKind.STARTED_READING, text="go")

    def test_negative_page_fails(self):
        with pytest.raises(InvalidEvent):
            BookEvent(EventKind.QUOTE, text="x", page=-1)

    @pytest.mark.parametrize("page", ["12", 1.5, True])
    def test_non_integer_page_fails(self, page):
        with pytest.raises(InvalidEvent, match="integer"):
            BookEvent(EventKind.QUOTE, text="x", page=page)

    @pytest.mark.parametrize("rating", [4.5, "4"])
    def test_non_integer_rating_fails(self, rating):
        with pytest.raises(InvalidEvent, match="integer"):
            BookEvent.review("Good", rating)

    def test_naive_timestamp_fails(self):
        with pytest.raises(InvalidEvent, match="timezone-aware"):
            BookEvent.started_reading(at=datetime(2024, 1, 1, 9, 0))

    def test_naive_timestamp_fails_for_annotations(self):
        with pytest.raises(InvalidEvent, match="timezone-aware"):
            BookEvent.comment("note", 3, at=datetime(2024, 1, 1, 9, 0))

    def test_timestamp_must_be_a_datetime(self):
        with pytest.raises(InvalidEvent):
            BookEvent(EventKind.STARTED_READING, timestamp="2024-01-01T09:00:00+00:00")

    def test_invalid_event_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            BookEvent.comment("", 0)
        with pytest.raises(ValueError):
            BookEvent.comment("", 0)


def test_events_are_immutable():
    event = BookEvent.comment("text", 1)
    with pytest.raises(AttributeError):
        event.text = "other"
