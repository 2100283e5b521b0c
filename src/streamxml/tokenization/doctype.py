"""DOCTYPE declaration sub-parser.

A DOCTYPE is matched against five alternative grammars, tried in a fixed
order; the first one that matches at the ``<`` wins:

1. ``<!DOCTYPE root SYSTEM "uri" [subset]>``
2. ``<!DOCTYPE root PUBLIC "pubid" "uri" [subset]>``
3. ``<!DOCTYPE root [subset]>``
4. ``<!DOCTYPE root SYSTEM "uri">``
5. ``<!DOCTYPE root PUBLIC "pubid" "uri">``

The internal subset is captured verbatim, brackets included, and is not
interpreted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

from .scanner import (
    XML_WHITESPACE,
    match_keyword,
    scan_balanced,
    scan_quoted,
    skip_whitespace,
)

DOCTYPE_KEYWORD = "<!DOCTYPE"
_ROOT_TERMINATORS = XML_WHITESPACE + "[>"


class ExternalIdKind(Enum):
    """Kind of external subset reference."""

    SYSTEM = "SYSTEM"
    PUBLIC = "PUBLIC"


@dataclass
class DoctypeDescriptor:
    """Fields recovered from a DOCTYPE declaration."""

    root: str
    kind: Optional[ExternalIdKind] = None
    public_id: Optional[str] = None
    uri: Optional[str] = None
    internal: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate descriptor fields."""
        if not self.root:
            raise ValueError("DOCTYPE root element name cannot be empty")
        if self.public_id is not None and self.kind is not ExternalIdKind.PUBLIC:
            raise ValueError("public_id requires a PUBLIC external identifier")

    @property
    def has_internal_subset(self) -> bool:
        """Check whether an internal subset was declared."""
        return self.internal is not None

    def to_dict(self) -> Dict[str, Any]:
        """Present fields as a dictionary, omitting absent ones."""
        data: Dict[str, Any] = {"root": self.root}
        if self.kind is not None:
            data["kind"] = self.kind.value
        for name in ("public_id", "uri", "internal"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data


class _Grammar(NamedTuple):
    kind: Optional[ExternalIdKind]
    internal: bool


GRAMMARS: Tuple[_Grammar, ...] = (
    _Grammar(ExternalIdKind.SYSTEM, internal=True),
    _Grammar(ExternalIdKind.PUBLIC, internal=True),
    _Grammar(None, internal=True),
    _Grammar(ExternalIdKind.SYSTEM, internal=False),
    _Grammar(ExternalIdKind.PUBLIC, internal=False),
)


def _require_whitespace(text: str, pos: int) -> int:
    after = skip_whitespace(text, pos)
    return after if after > pos else -1


def _scan_root(text: str, pos: int) -> Tuple[int, str]:
    end = pos
    length = len(text)
    while end < length and text[end] not in _ROOT_TERMINATORS:
        end += 1
    return end, text[pos:end]


def _match_grammar(
    text: str, pos: int, grammar: _Grammar
) -> Optional[Tuple[int, DoctypeDescriptor]]:
    cursor = match_keyword(text, pos, DOCTYPE_KEYWORD)
    if cursor == -1:
        return None
    cursor = _require_whitespace(text, cursor)
    if cursor == -1:
        return None
    cursor, root = _scan_root(text, cursor)
    if not root:
        return None

    public_id: Optional[str] = None
    uri: Optional[str] = None
    if grammar.kind is not None:
        cursor = _require_whitespace(text, cursor)
        if cursor == -1:
            return None
        cursor = match_keyword(text, cursor, grammar.kind.value)
        if cursor == -1:
            return None
        cursor = _require_whitespace(text, cursor)
        if cursor == -1:
            return None
        if grammar.kind is ExternalIdKind.PUBLIC:
            literal = scan_quoted(text, cursor)
            if literal is None:
                return None
            cursor, public_id = literal
            cursor = _require_whitespace(text, cursor)
            if cursor == -1:
                return None
        literal = scan_quoted(text, cursor)
        if literal is None:
            return None
        cursor, uri = literal

    internal: Optional[str] = None
    if grammar.internal:
        subset = scan_balanced(text, skip_whitespace(text, cursor))
        if subset is None:
            return None
        cursor, internal = subset

    cursor = skip_whitespace(text, cursor)
    if not text.startswith(">", cursor):
        return None
    descriptor = DoctypeDescriptor(
        root=root,
        kind=grammar.kind,
        public_id=public_id,
        uri=uri,
        internal=internal,
    )
    return cursor + 1, descriptor


def parse_doctype(text: str, pos: int) -> Optional[Tuple[int, DoctypeDescriptor]]:
    """Match a DOCTYPE declaration starting exactly at ``pos``.

    Args:
        text: Whole document
        pos: Index of the ``<`` opening the declaration

    Returns:
        ``(end, descriptor)`` with ``end`` just past the closing ``>``, or None
        when no grammar matches
    """
    for grammar in GRAMMARS:
        matched = _match_grammar(text, pos, grammar)
        if matched is not None:
            return matched
    return None
