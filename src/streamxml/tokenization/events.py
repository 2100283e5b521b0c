"""Event types and sink plumbing for the tokenizer.

A sink is any object that offers some of the callbacks named by
:class:`EventType` (``sink.starttag``, ``sink.text``, ...), or a mapping from
those names to callables. Each callback is invoked as::

    callback(value, attributes, start, end)

where ``attributes`` is a dict, a :class:`~.doctype.DoctypeDescriptor` for
``dtd`` events, or None, and ``start``/``end`` are the inclusive 1-based
character positions of the construct. Callbacks the sink lacks are skipped.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

EventCallback = Callable[[str, Any, int, int], None]

PI_TEXT_KEY = "_text"


class EventType(Enum):
    """Structural events emitted by the tokenizer."""

    STARTTAG = "starttag"
    ENDTAG = "endtag"
    TEXT = "text"
    CDATA = "cdata"
    DECL = "decl"
    PI = "pi"
    COMMENT = "comment"
    DTD = "dtd"


@dataclass
class Event:
    """A single recorded event."""

    type: EventType
    value: str
    attributes: Any
    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate event span."""
        if self.start < 1:
            raise ValueError("Event start must be >= 1")
        if self.end < self.start - 1:
            raise ValueError("Event end must be >= start - 1")

    @property
    def span(self) -> Tuple[int, int]:
        """Inclusive 1-based (start, end) positions."""
        return (self.start, self.end)


def resolve_callback(sink: Any, event_type: EventType) -> Optional[EventCallback]:
    """Look up the sink callback for ``event_type``, if it has one."""
    if sink is None:
        return None
    if isinstance(sink, Mapping):
        callback = sink.get(event_type.value)
    else:
        callback = getattr(sink, event_type.value, None)
    return callback if callable(callback) else None


class EventRecorder:
    """Sink that records every event it receives, in order."""

    def __init__(self) -> None:
        self.events: List[Event] = []

    def _record(self, event_type: EventType, value: str, attributes: Any,
                start: int, end: int) -> None:
        self.events.append(Event(event_type, value, attributes, start, end))

    def starttag(self, value: str, attributes: Any, start: int, end: int) -> None:
        self._record(EventType.STARTTAG, value, attributes, start, end)

    def endtag(self, value: str, attributes: Any, start: int, end: int) -> None:
        self._record(EventType.ENDTAG, value, attributes, start, end)

    def text(self, value: str, attributes: Any, start: int, end: int) -> None:
        self._record(EventType.TEXT, value, attributes, start, end)

    def cdata(self, value: str, attributes: Any, start: int, end: int) -> None:
        self._record(EventType.CDATA, value, attributes, start, end)

    def decl(self, value: str, attributes: Any, start: int, end: int) -> None:
        self._record(EventType.DECL, value, attributes, start, end)

    def pi(self, value: str, attributes: Any, start: int, end: int) -> None:
        self._record(EventType.PI, value, attributes, start, end)

    def comment(self, value: str, attributes: Any, start: int, end: int) -> None:
        self._record(EventType.COMMENT, value, attributes, start, end)

    def dtd(self, value: str, attributes: Any, start: int, end: int) -> None:
        self._record(EventType.DTD, value, attributes, start, end)

    def of_type(self, event_type: EventType) -> List[Event]:
        """Recorded events of one type."""
        return [event for event in self.events if event.type is event_type]

    def clear(self) -> None:
        self.events.clear()
