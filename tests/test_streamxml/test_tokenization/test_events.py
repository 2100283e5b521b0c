"""Tests for event records and sink plumbing."""

import pytest

from streamxml.tokenization.events import (
    Event,
    EventRecorder,
    EventType,
    resolve_callback,
)


class TestEvent:
    """Tests for the Event record."""

    def test_event_creation(self):
        """Test Event fields and span."""
        event = Event(EventType.TEXT, "hi", None, 4, 5)
        assert event.span == (4, 5)

    def test_empty_span_is_allowed(self):
        """Test end may sit one before start."""
        event = Event(EventType.TEXT, "", None, 3, 2)
        assert event.span == (3, 2)

    def test_event_validation(self):
        """Test Event span validation."""
        with pytest.raises(ValueError, match="Event start must be >= 1"):
            Event(EventType.TEXT, "x", None, 0, 1)
        with pytest.raises(ValueError, match="Event end must be >= start - 1"):
            Event(EventType.TEXT, "x", None, 5, 2)


class TestResolveCallback:
    """Tests for sink callback lookup."""

    def test_object_sink(self):
        """Test callbacks found as attributes."""
        recorder = EventRecorder()
        assert resolve_callback(recorder, EventType.CDATA) == recorder.cdata

    def test_mapping_sink(self):
        """Test callbacks found as mapping entries."""
        def callback(value, attributes, start, end):
            return None

        sink = {"pi": callback}
        assert resolve_callback(sink, EventType.PI) is callback
        assert resolve_callback(sink, EventType.TEXT) is None

    def test_missing_sink(self):
        """Test a None sink has no callbacks."""
        assert resolve_callback(None, EventType.STARTTAG) is None


class TestEventRecorder:
    """Tests for the recording sink."""

    def test_records_every_event_type(self):
        """Test each callback appends an event of its own type."""
        recorder = EventRecorder()
        for position, event_type in enumerate(EventType, start=1):
            getattr(recorder, event_type.value)("v", None, position, position)

        assert [event.type for event in recorder.events] == list(EventType)
        assert recorder.of_type(EventType.DTD)[0].start == len(EventType)

    def test_clear(self):
        """Test clearing recorded events."""
        recorder = EventRecorder()
        recorder.text("x", None, 1, 1)
        recorder.clear()
        assert recorder.events == []
