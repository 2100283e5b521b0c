"""Composable scanning functions for XML markup.

All functions work on 0-based indices into the document string and never
raise: a failed scan is reported as ``None`` (or ``-1`` for plain searches)
so callers decide how to report the violation.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

XML_WHITESPACE = " \t\n\r\f\v"
QUOTES = "\"'"
NAME_PUNCTUATION = "-:_"


def is_name_char(char: str) -> bool:
    """Check whether ``char`` may appear in a tag or attribute name."""
    return char.isalnum() or (char != "" and char in NAME_PUNCTUATION)


def is_blank(text: str) -> bool:
    """Check whether ``text`` is empty or whitespace only."""
    return text.strip(XML_WHITESPACE) == ""


def skip_whitespace(text: str, pos: int) -> int:
    """Return the index of the first non-whitespace character at or after ``pos``."""
    length = len(text)
    while pos < length and text[pos] in XML_WHITESPACE:
        pos += 1
    return pos


def skip_to_char(text: str, pos: int, char: str) -> int:
    """Return the index of the next ``char`` at or after ``pos``, or -1."""
    return text.find(char, pos)


def scan_until(text: str, pos: int, terminator: str) -> int:
    """Return the index where ``terminator`` next starts at or after ``pos``, or -1."""
    return text.find(terminator, pos)


def scan_name(text: str, pos: int) -> int:
    """Return the index just past the run of name characters starting at ``pos``."""
    length = len(text)
    while pos < length and is_name_char(text[pos]):
        pos += 1
    return pos


def scan_quoted(text: str, pos: int) -> Optional[Tuple[int, str]]:
    """Scan a quoted literal starting at ``pos``.

    Returns:
        ``(end, value)`` where ``end`` is the index just past the closing quote,
        or None if ``pos`` is not a quote or the literal is never closed
    """
    if pos >= len(text) or text[pos] not in QUOTES:
        return None
    close = text.find(text[pos], pos + 1)
    if close == -1:
        return None
    return close + 1, text[pos + 1:close]


def scan_balanced(
    text: str, pos: int, opener: str = "[", closer: str = "]"
) -> Optional[Tuple[int, str]]:
    """Scan a bracketed region with nesting, starting at ``pos``.

    Returns:
        ``(end, region)`` where ``region`` includes the outer brackets, or
        None if ``pos`` is not ``opener`` or the brackets never balance
    """
    if pos >= len(text) or text[pos] != opener:
        return None
    depth = 0
    for index in range(pos, len(text)):
        char = text[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index + 1, text[pos:index + 1]
    return None


def match_keyword(text: str, pos: int, keyword: str) -> int:
    """Return the index past ``keyword`` if it occurs exactly at ``pos``, or -1."""
    if text.startswith(keyword, pos):
        return pos + len(keyword)
    return -1


@dataclass
class MarkupBoundary:
    """First-pass location of the next tag, before classification.

    ``body`` excludes the ``<``, a leading ``/`` and a trailing ``/``;
    ``tag_end`` is the index of the closing ``>``.
    """

    text_start: int
    tag_start: int
    tag_end: int
    body: str
    closing: bool = False
    self_closing: bool = False

    @property
    def has_leading_text(self) -> bool:
        """Check whether text precedes the tag."""
        return self.tag_start > self.text_start


def find_markup(text: str, pos: int) -> Optional[MarkupBoundary]:
    """Locate the next ``<`` ... ``>`` boundary at or after ``pos``.

    The body stops at the first ``>``; quoted ``>`` characters inside
    attribute values are dealt with afterwards by extending the tag.
    """
    tag_start = skip_to_char(text, pos, "<")
    if tag_start == -1:
        return None
    body_start = tag_start + 1
    closing = text.startswith("/", body_start)
    if closing:
        body_start += 1
    tag_end = skip_to_char(text, body_start, ">")
    if tag_end == -1:
        return None
    self_closing = tag_end - 1 >= body_start and text[tag_end - 1] == "/"
    body_end = tag_end - 1 if self_closing else tag_end
    return MarkupBoundary(
        text_start=pos,
        tag_start=tag_start,
        tag_end=tag_end,
        body=text[body_start:body_end],
        closing=closing,
        self_closing=self_closing,
    )


def find_tag_close(text: str, pos: int) -> Optional[Tuple[int, bool]]:
    """Find the next ``>`` at or after ``pos``.

    Returns:
        ``(index, self_closing)`` where ``self_closing`` tells whether the
        ``>`` is preceded by ``/``, or None at end of input
    """
    close = skip_to_char(text, pos, ">")
    if close == -1:
        return None
    return close, close > pos and text[close - 1] == "/"


def has_unterminated_quote(body: str) -> bool:
    """Check whether a tag body ends inside a quoted attribute value."""
    index = 0
    while True:
        index = skip_to_char(body, index, "=")
        if index == -1:
            return False
        value_start = skip_whitespace(body, index + 1)
        if value_start < len(body) and body[value_start] in QUOTES:
            scanned = scan_quoted(body, value_start)
            if scanned is None:
                return True
            index = scanned[0]
        else:
            index = value_start


def split_tag_name(body: str) -> Tuple[str, int]:
    """Split a tag body at its first whitespace character.

    Returns:
        ``(name, rest_start)``; the name is the whole body when it holds no
        whitespace
    """
    for index, char in enumerate(body):
        if char in XML_WHITESPACE:
            return body[:index], index
    return body, len(body)


class RawAttribute(NamedTuple):
    """Attribute as written, before case folding and entity expansion."""

    name: str
    value: str


def scan_attributes(body: str, pos: int = 0) -> List[RawAttribute]:
    """Collect every ``name="value"`` or ``name='value'`` pair after ``pos``.

    Text that does not form a quoted pair is skipped.
    """
    attributes: List[RawAttribute] = []
    length = len(body)
    while pos < length:
        if not is_name_char(body[pos]):
            pos += 1
            continue
        name_end = scan_name(body, pos)
        equals = skip_whitespace(body, name_end)
        if equals < length and body[equals] == "=":
            scanned = scan_quoted(body, skip_whitespace(body, equals + 1))
            if scanned is not None:
                end, value = scanned
                attributes.append(RawAttribute(body[pos:name_end], value))
                pos = end
                continue
        pos = name_end
    return attributes
