"""Diagnostic and metrics objects for streaming XML tokenization.

This module defines the records produced alongside the event stream: diagnostics
for reported well-formedness violations and per-parse metrics.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    ERROR = auto()      # Violation the parse continued past
    CRITICAL = auto()   # Violation that aborts the parse regardless of handler


@dataclass
class ParseDiagnostic:
    """Single well-formedness violation with its document position."""

    message: str
    position: int
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if self.position < 1:
            raise ValueError("Diagnostic position must be >= 1")

    def __str__(self) -> str:
        return f"{self.message} [char={self.position}]"


@dataclass
class ParseMetrics:
    """Counters collected during a single parse call."""

    characters_processed: int = 0
    events_emitted: int = 0
    errors_reported: int = 0
    max_depth: int = 0
    quote_extensions: int = 0
    processing_time_ms: float = 0.0
    event_type_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    def add_event(self, event_type: str) -> None:
        """Count an emitted event of the given type."""
        self.events_emitted += 1
        self.event_type_distribution[event_type] = (
            self.event_type_distribution.get(event_type, 0) + 1
        )
