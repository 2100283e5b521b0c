"""Streaming XML tokenizer.

A non-validating XML tokenizer that walks a complete document once and
reports start tags, end tags, text, comments, CDATA sections, the XML
declaration, processing instructions and DOCTYPE declarations to a sink,
checking tag balance as it goes.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), collect_events()
- Level 2: Configured tokenizer - XMLTokenizer with ParserOptions
"""

from typing import Any, List, Optional

__version__ = "0.1.0"
__author__ = "Stream XML Tokenizer Team"

from .shared.config import ParserOptions
from .shared.errors import LoggingErrorHandler, XMLParseError
from .shared.result import ParseMetrics
from .tokenization import (
    DoctypeDescriptor,
    Event,
    EventRecorder,
    EventType,
    XMLTokenizer,
)


def _resolve_options(options: Optional[ParserOptions], overrides: Any) -> ParserOptions:
    options = options if options is not None else ParserOptions()
    if overrides:
        options = options.override(**overrides)
    return options


def parse(
    text: str, sink: Any, options: Optional[ParserOptions] = None, **overrides: Any
) -> ParseMetrics:
    """Tokenize ``text`` into ``sink`` and return the parse metrics.

    Args:
        text: Complete XML document
        sink: Object or mapping providing event callbacks
        options: Parser options; defaults to :class:`ParserOptions`
        **overrides: Individual option fields to replace

    Returns:
        Metrics for the completed parse
    """
    tokenizer = XMLTokenizer(sink, _resolve_options(options, overrides))
    tokenizer.parse(text)
    return tokenizer.metrics


def collect_events(
    text: str, options: Optional[ParserOptions] = None, **overrides: Any
) -> List[Event]:
    """Tokenize ``text`` and return every event in document order."""
    recorder = EventRecorder()
    parse(text, recorder, options, **overrides)
    return recorder.events


__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "parse",
    "collect_events",

    # Level 2: Configured tokenizer
    "XMLTokenizer",
    "ParserOptions",
    "LoggingErrorHandler",

    # Events and results
    "DoctypeDescriptor",
    "Event",
    "EventRecorder",
    "EventType",
    "ParseMetrics",
    "XMLParseError",
]
