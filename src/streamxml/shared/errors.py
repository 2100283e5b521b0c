"""Well-formedness error reporting for streaming XML tokenization.

Every violation detected by the tokenizer passes through a single error
handler, a callable taking ``(message, position)``. Two strategies ship
with the package:

* :func:`raise_parse_error`, the default, aborts the parse by raising
  :class:`XMLParseError`.
* :class:`LoggingErrorHandler` logs each violation at WARNING (ERROR for
  the aborting unterminated attribute value), records it as a
  :class:`~streamxml.shared.result.ParseDiagnostic` and lets the parse
  continue.
"""

from typing import Callable, List, Optional

from .logging import get_logger
from .result import DiagnosticSeverity, ParseDiagnostic

ErrorHandler = Callable[[str, int], None]


class ErrorMessage:
    """Messages reported through the error handler."""

    XML = "Error Parsing XML"
    DECL = "Error Parsing XMLDecl"
    DECL_START = "XMLDecl not at start of document"
    DECL_ATTR = "Invalid XMLDecl attributes"
    PI = "Error Parsing Processing Instruction"
    COMMENT = "Error Parsing Comment"
    CDATA = "Error Parsing CDATA"
    DTD = "Error Parsing DTD"
    END_TAG = "End Tag Attributes Invalid"
    UNMATCHED_TAG = "Unbalanced Tag"
    INCOMPLETE = "Incomplete XML Document"
    UNTERMINATED_ATTR = "Unterminated attribute value"


class XMLParseError(Exception):
    """Raised when a parse is aborted by a well-formedness violation."""

    def __init__(self, message: str, position: int, fatal: bool = False) -> None:
        super().__init__(f"{message or 'Parse Error'} [char={position}]")
        self.message = message
        self.position = position
        self.fatal = fatal


def raise_parse_error(message: str, position: int) -> None:
    """Default error handler: abort the parse."""
    raise XMLParseError(message, position)


class LoggingErrorHandler:
    """Error handler that logs violations and lets the parse continue.

    The tokenizer keeps going after this handler returns, but makes no
    promise about the consistency of its tag stack after a structural error.
    Collected diagnostics accumulate across parses until :meth:`clear`.
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        logger_name: Optional[str] = None
    ) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(
            logger_name or __name__, correlation_id, "error_handler"
        )
        self.diagnostics: List[ParseDiagnostic] = []

    def __call__(self, message: str, position: int) -> None:
        # the tokenizer aborts after an unterminated attribute value whatever we do
        if message == ErrorMessage.UNTERMINATED_ATTR:
            severity = DiagnosticSeverity.CRITICAL
        else:
            severity = DiagnosticSeverity.ERROR
        diagnostic = ParseDiagnostic(
            message=message,
            position=position,
            severity=severity,
            correlation_id=self.correlation_id,
        )
        self.diagnostics.append(diagnostic)
        extra = {"position": position, "severity": severity.name}
        if severity is DiagnosticSeverity.CRITICAL:
            self.logger.error(str(diagnostic), extra=extra)
        else:
            self.logger.warning(str(diagnostic), extra=extra)

    @property
    def has_errors(self) -> bool:
        """Check whether any violation has been recorded."""
        return len(self.diagnostics) > 0

    @property
    def messages(self) -> List[str]:
        """Recorded messages in report order."""
        return [diagnostic.message for diagnostic in self.diagnostics]

    def clear(self) -> None:
        """Forget all recorded diagnostics."""
        self.diagnostics.clear()
