"""Configuration for streaming XML tokenization.

:class:`ParserOptions` holds the three switches that shape the event stream
(whitespace stripping, entity expansion and the error handler) together with
the correlation ID used to tag log records.
"""

import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from .errors import ErrorHandler, LoggingErrorHandler, raise_parse_error

# camelCase spellings accepted by from_dict
_OPTION_ALIASES = {
    "stripWhitespace": "strip_whitespace",
    "stripWS": "strip_whitespace",
    "expandEntities": "expand_entities",
    "errorHandler": "error_handler",
    "correlationId": "correlation_id",
}


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class ParserOptions:
    """Options consulted by :class:`~streamxml.XMLTokenizer` on every parse.

    Attributes:
        strip_whitespace: Trim leading/trailing whitespace from text and
            comments, and drop text events that are whitespace only.
        expand_entities: Expand the predefined and single-byte numeric
            entities in text, comments and attribute values.
        error_handler: Callable invoked as ``handler(message, position)`` for
            every violation. ``None`` ignores violations.
        correlation_id: Tag attached to the tokenizer's log records.
    """

    strip_whitespace: bool = True
    expand_entities: bool = True
    error_handler: Optional[ErrorHandler] = field(
        default=raise_parse_error, compare=False
    )
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate parser options."""
        if not isinstance(self.strip_whitespace, bool):
            raise ValueError("strip_whitespace must be a bool")
        if not isinstance(self.expand_entities, bool):
            raise ValueError("expand_entities must be a bool")
        if self.error_handler is not None and not callable(self.error_handler):
            raise ValueError("error_handler must be callable or None")

    @property
    def raises_on_error(self) -> bool:
        """Check whether the default aborting handler is installed."""
        return self.error_handler is raise_parse_error

    @classmethod
    def strict(cls) -> "ParserOptions":
        """Default behaviour: normalize content and abort on the first violation."""
        return cls()

    @classmethod
    def preserving(cls) -> "ParserOptions":
        """Report content exactly as it appears in the document."""
        return cls(strip_whitespace=False, expand_entities=False)

    @classmethod
    def lenient(cls, correlation_id: Optional[str] = None) -> "ParserOptions":
        """Log violations through a :class:`LoggingErrorHandler` and keep going."""
        return cls(
            error_handler=LoggingErrorHandler(correlation_id=correlation_id),
            correlation_id=correlation_id,
        )

    def override(self, **kwargs: Any) -> "ParserOptions":
        """Create new options with specific fields replaced.

        Example:
            >>> options = ParserOptions()
            >>> options.override(strip_whitespace=False).strip_whitespace
            False
        """
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the serializable options to a dictionary.

        The error handler is not serializable and is left out.
        """
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "error_handler"
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert options to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserOptions":
        """Create options from a dictionary.

        Keys may use either the snake_case field names or the camelCase
        spellings ``stripWhitespace``, ``expandEntities`` and ``errorHandler``.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigValidationError(
                    f"Unknown parser option: {key}",
                    field_name=key,
                    suggestions=sorted(known),
                )
            values[name] = value
        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "ParserOptions":
        """Create options from a JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid options JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Options JSON must be an object")
        return cls.from_dict(data)
