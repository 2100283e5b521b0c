"""Entity expansion for text, comment and attribute content.

Only a closed set of references is understood: the five predefined XML
entities plus decimal (``&#NNN;``) and hexadecimal (``&#xHH;``) character
references whose code point fits in a single byte (0-255). Anything else,
including numeric references outside that range, is left exactly as written.

Expansion is a single left-to-right pass, so output produced by one
replacement is never rescanned: ``&amp;lt;`` becomes ``&lt;``.
"""

import re

PREDEFINED_ENTITIES = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "apos": "'",
}

MAX_CHARACTER_REFERENCE = 255

_REFERENCE_PATTERN = re.compile(
    r"&(?:(?P<name>lt|gt|amp|quot|apos)|#(?P<decimal>[0-9]+)|#x(?P<hex>[0-9A-Fa-f]+));"
)


def _character(code: int, original: str) -> str:
    if 0 <= code <= MAX_CHARACTER_REFERENCE:
        return chr(code)
    return original


def _replace(match: "re.Match[str]") -> str:
    name = match.group("name")
    if name is not None:
        return PREDEFINED_ENTITIES[name]
    decimal = match.group("decimal")
    if decimal is not None:
        return _character(int(decimal), match.group(0))
    return _character(int(match.group("hex"), 16), match.group(0))


def expand_entities(text: str) -> str:
    """Expand predefined entities and single-byte character references."""
    if "&" not in text:
        return text
    return _REFERENCE_PATTERN.sub(_replace, text)
