"""Core streaming XML tokenizer.

:class:`XMLTokenizer` makes a single forward pass over a complete document,
emitting structural events to a sink as it goes and tracking open tags on a
stack. Each iteration locates the next ``<`` ... ``>`` boundary, emits the
text in front of it, classifies the tag by its opening characters and hands
it to the matching sub-parser.

Violations are reported through ``options.error_handler``; the default
handler aborts the parse with :class:`~streamxml.shared.errors.XMLParseError`.
"""

import time
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

from ..shared.config import ParserOptions
from ..shared.errors import ErrorMessage, XMLParseError
from ..shared.logging import CorrelationLogger, get_logger
from ..shared.result import ParseMetrics
from .doctype import parse_doctype
from .entities import expand_entities
from .events import PI_TEXT_KEY, EventCallback, EventType, resolve_callback
from .scanner import (
    XML_WHITESPACE,
    MarkupBoundary,
    find_markup,
    find_tag_close,
    has_unterminated_quote,
    is_blank,
    scan_attributes,
    scan_until,
    split_tag_name,
)

Attributes = Optional[Dict[str, str]]

DECL_PREFIX = "?xml"
PI_PREFIX = "?"
COMMENT_PREFIX = "!--"
DOCTYPE_PREFIX = "!DOCTYPE"
CDATA_PREFIX = "![CDATA["


class TagKind(Enum):
    """Tag categories recognised from the opening characters of a tag body."""

    DECLARATION = auto()
    PROCESSING_INSTRUCTION = auto()
    COMMENT = auto()
    DOCTYPE = auto()
    CDATA = auto()
    ELEMENT = auto()


def classify_tag(body: str) -> TagKind:
    """Classify a first-pass tag body, most specific prefix first."""
    if (
        body.startswith(DECL_PREFIX)
        and len(body) > len(DECL_PREFIX)
        and body[len(DECL_PREFIX)] in XML_WHITESPACE
    ):
        return TagKind.DECLARATION
    if body.startswith(PI_PREFIX):
        return TagKind.PROCESSING_INSTRUCTION
    if body.startswith(COMMENT_PREFIX):
        return TagKind.COMMENT
    if body.startswith(DOCTYPE_PREFIX):
        return TagKind.DOCTYPE
    if body.startswith(CDATA_PREFIX):
        return TagKind.CDATA
    return TagKind.ELEMENT


class XMLTokenizer:
    """Non-validating XML tokenizer that reports events to a sink.

    Example:
        >>> from streamxml import EventRecorder, XMLTokenizer
        >>> recorder = EventRecorder()
        >>> XMLTokenizer(recorder).parse('<a b="1">hi</a>')
        >>> [(e.type.value, e.value) for e in recorder.events]
        [('starttag', 'a'), ('text', 'hi'), ('endtag', 'a')]

    An instance owns its tag stack and must not be shared between threads
    while a parse is running.
    """

    def __init__(self, sink: Any = None, options: Optional[ParserOptions] = None) -> None:
        """Initialize the tokenizer.

        Args:
            sink: Object or mapping providing event callbacks
            options: Parser options; may be replaced or mutated between parses
        """
        self.sink = sink
        self.options = options if options is not None else ParserOptions()
        self.metrics = ParseMetrics()
        self._stack: List[str] = []
        self._text = ""
        self._callbacks: Dict[EventType, Optional[EventCallback]] = {}
        self._logger: CorrelationLogger = get_logger(__name__, None, "xml_tokenizer")

    @property
    def stack(self) -> Tuple[str, ...]:
        """Names of the currently open tags, outermost first."""
        return tuple(self._stack)

    @property
    def depth(self) -> int:
        """Number of currently open tags."""
        return len(self._stack)

    def _reset_state(self, text: str) -> None:
        self._stack = []
        self._text = text
        self.metrics = ParseMetrics(characters_processed=len(text))
        self._callbacks = {
            event_type: resolve_callback(self.sink, event_type)
            for event_type in EventType
        }
        self._logger = get_logger(
            __name__, self.options.correlation_id, "xml_tokenizer"
        )

    def parse(self, text: str) -> None:
        """Tokenize ``text``, dispatching events to the sink.

        Args:
            text: Complete XML document

        Raises:
            XMLParseError: From the default error handler on the first
                violation, or unconditionally when a quoted attribute value
                is never closed
        """
        start_time = time.time()
        self._reset_state(text)
        self._logger.debug("Starting parse", extra={"char_count": len(text)})

        try:
            self._run()
        finally:
            self.metrics.processing_time_ms = (time.time() - start_time) * 1000.0

        self._logger.debug(
            "Parse completed",
            extra={
                "event_count": self.metrics.events_emitted,
                "error_count": self.metrics.errors_reported,
                "processing_time_ms": self.metrics.processing_time_ms,
            }
        )

    def _run(self) -> None:
        pos = 0
        while True:
            boundary = find_markup(self._text, pos)
            if boundary is None:
                self._finish(pos)
                return
            self._emit_leading_text(boundary)
            kind = classify_tag(boundary.body)
            if kind is TagKind.DECLARATION:
                pos = self._parse_declaration(boundary)
            elif kind is TagKind.PROCESSING_INSTRUCTION:
                pos = self._parse_processing_instruction(boundary)
            elif kind is TagKind.COMMENT:
                pos = self._parse_comment(boundary)
            elif kind is TagKind.DOCTYPE:
                pos = self._parse_doctype(boundary)
            elif kind is TagKind.CDATA:
                pos = self._parse_cdata(boundary)
            else:
                pos = self._parse_element(boundary)

    def _finish(self, pos: int) -> None:
        if self._stack:
            self._report(ErrorMessage.INCOMPLETE, pos)
        elif not is_blank(self._text[pos:]):
            self._report(ErrorMessage.XML, pos)

    # Event helpers

    def _report(self, message: str, index: int) -> None:
        position = index + 1
        self.metrics.errors_reported += 1
        self._logger.debug(
            "Well-formedness violation",
            extra={"violation": message, "position": position}
        )
        handler = self.options.error_handler
        if handler is not None:
            handler(message, position)

    def _emit(
        self, event_type: EventType, value: str, attributes: Any, start: int, end: int
    ) -> None:
        # start is the 0-based index of the first character, end is exclusive
        self.metrics.add_event(event_type.value)
        callback = self._callbacks.get(event_type)
        if callback is not None:
            callback(value, attributes, start + 1, end)

    def _normalize(self, text: str) -> str:
        if self.options.strip_whitespace:
            text = text.strip(XML_WHITESPACE)
        return self._expand(text)

    def _expand(self, text: str) -> str:
        if self.options.expand_entities:
            return expand_entities(text)
        return text

    def _parse_tag(self, body: str) -> Tuple[str, Attributes]:
        name, rest = split_tag_name(body)
        attributes: Dict[str, str] = {}
        for attribute in scan_attributes(body, rest):
            attributes[attribute.name.lower()] = self._expand(attribute.value)
        return name, attributes or None

    def _emit_leading_text(self, boundary: MarkupBoundary) -> None:
        if not boundary.has_leading_text:
            return
        text = self._normalize(self._text[boundary.text_start:boundary.tag_start])
        if text:
            self._emit(EventType.TEXT, text, None, boundary.text_start, boundary.tag_start)

    # Sub-parsers; each returns the index just past what it consumed

    def _parse_declaration(self, boundary: MarkupBoundary) -> int:
        start = boundary.tag_start
        close = scan_until(self._text, start + 2, "?>")
        if close == -1:
            self._report(ErrorMessage.DECL, start)
            return boundary.tag_end + 1
        if start != 0:
            self._report(ErrorMessage.DECL_START, start)
        name, attributes = self._parse_tag(self._text[start + 2:close])
        if attributes is None or "version" not in attributes:
            self._report(ErrorMessage.DECL_ATTR, start)
        end = close + 2
        self._emit(EventType.DECL, name, attributes, start, end)
        return end

    def _parse_processing_instruction(self, boundary: MarkupBoundary) -> int:
        start = boundary.tag_start
        close = scan_until(self._text, start + 2, "?>")
        if close == -1:
            self._report(ErrorMessage.PI, start)
            return boundary.tag_end + 1
        body = self._text[start + 2:close]
        name, attributes = self._parse_tag(body)
        instruction = body[len(name):]
        if instruction:
            if attributes is None:
                attributes = {}
            attributes[PI_TEXT_KEY] = instruction
        end = close + 2
        self._emit(EventType.PI, name, attributes, start, end)
        return end

    def _parse_comment(self, boundary: MarkupBoundary) -> int:
        start = boundary.tag_start
        content_start = start + 1 + len(COMMENT_PREFIX)
        close = scan_until(self._text, content_start, "-->")
        if close == -1:
            self._report(ErrorMessage.COMMENT, start)
            return boundary.tag_end + 1
        end = close + 3
        comment = self._normalize(self._text[content_start:close])
        self._emit(EventType.COMMENT, comment, None, start, end)
        return end

    def _parse_cdata(self, boundary: MarkupBoundary) -> int:
        start = boundary.tag_start
        content_start = start + 1 + len(CDATA_PREFIX)
        close = scan_until(self._text, content_start, "]]>")
        if close == -1:
            self._report(ErrorMessage.CDATA, start)
            return boundary.tag_end + 1
        end = close + 3
        self._emit(EventType.CDATA, self._text[content_start:close], None, start, end)
        return end

    def _parse_doctype(self, boundary: MarkupBoundary) -> int:
        start = boundary.tag_start
        matched = parse_doctype(self._text, start)
        if matched is None:
            self._report(ErrorMessage.DTD, start)
            return boundary.tag_end + 1
        end, descriptor = matched
        self._emit(EventType.DTD, descriptor.root, descriptor, start, end)
        return end

    def _extend_tag(self, boundary: MarkupBoundary) -> Tuple[str, int, bool]:
        """Grow the tag body past ``>`` characters that sit inside quotes.

        Every round moves the tag end strictly forward, and running out of
        input aborts the parse, so the loop always terminates.
        """
        body = boundary.body
        tag_end = boundary.tag_end
        self_closing = boundary.self_closing
        while has_unterminated_quote(body):
            extension = find_tag_close(self._text, tag_end + 1)
            if extension is None:
                self._report(ErrorMessage.UNTERMINATED_ATTR, boundary.tag_start)
                raise XMLParseError(
                    ErrorMessage.UNTERMINATED_ATTR, boundary.tag_start + 1, fatal=True
                )
            close, slash = extension
            if self_closing:
                body += "/"
            body += self._text[tag_end:close - 1 if slash else close]
            tag_end, self_closing = close, slash
            self.metrics.quote_extensions += 1
        return body, tag_end, self_closing

    def _parse_element(self, boundary: MarkupBoundary) -> int:
        body, tag_end, self_closing = self._extend_tag(boundary)
        name, attributes = self._parse_tag(body)
        start, end = boundary.tag_start, tag_end + 1

        if boundary.closing:
            if attributes is not None:
                self._report(f"{ErrorMessage.END_TAG} (/{name})", start)
            opened = self._stack.pop() if self._stack else None
            if opened != name:
                self._report(f"{ErrorMessage.UNMATCHED_TAG} (/{name})", start)
            self._emit(EventType.ENDTAG, name, None, start, end)
            return end

        self._stack.append(name)
        self.metrics.max_depth = max(self.metrics.max_depth, len(self._stack))
        self._emit(EventType.STARTTAG, name, attributes, start, end)
        if self_closing:
            self._stack.pop()
            self._emit(EventType.ENDTAG, name, None, start, end)
        return end
