"""Tokenization engine for streaming XML parsing.

This module turns a complete XML document into a stream of structural events
delivered to a sink, checking tag balance and basic syntax along the way.

Key Components:
    XMLTokenizer: Main tokenization class driving the parse loop
    EventType: Enumeration of the events a sink can receive
    EventRecorder: Sink that records events for later inspection
    DoctypeDescriptor: Fields recovered from a DOCTYPE declaration
    expand_entities: Predefined and numeric entity expansion
"""

from .doctype import (
    DoctypeDescriptor,
    ExternalIdKind,
    parse_doctype,
)
from .entities import expand_entities
from .events import (
    PI_TEXT_KEY,
    Event,
    EventRecorder,
    EventType,
)
from .tokenizer import (
    TagKind,
    XMLTokenizer,
    classify_tag,
)

__all__ = [
    "PI_TEXT_KEY",
    "DoctypeDescriptor",
    "Event",
    "EventRecorder",
    "EventType",
    "ExternalIdKind",
    "TagKind",
    "XMLTokenizer",
    "classify_tag",
    "expand_entities",
    "parse_doctype",
]
