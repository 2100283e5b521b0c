"""Shared utilities for streaming XML tokenization.

This module provides configuration, error reporting, diagnostics and logging
used by the tokenization layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ParserOptions,
)
from .errors import (
    ErrorHandler,
    ErrorMessage,
    LoggingErrorHandler,
    XMLParseError,
    raise_parse_error,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticSeverity,
    ParseDiagnostic,
    ParseMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DiagnosticSeverity",
    "ErrorHandler",
    "ErrorMessage",
    "LoggingErrorHandler",
    "ParseDiagnostic",
    "ParseMetrics",
    "ParserOptions",
    "XMLParseError",
    "get_logger",
    "raise_parse_error",
]
