"""Tests for diagnostics and metrics."""

import pytest

from streamxml.shared.result import DiagnosticSeverity, ParseDiagnostic, ParseMetrics


class TestParseDiagnostic:
    """Test suite for ParseDiagnostic."""

    def test_diagnostic_creation(self):
        """Test diagnostic fields and string form."""
        diagnostic = ParseDiagnostic("Unbalanced Tag (/a)", 7)

        assert diagnostic.correlation_id is None
        assert diagnostic.severity is DiagnosticSeverity.ERROR
        assert diagnostic.timestamp > 0
        assert str(diagnostic) == "Unbalanced Tag (/a) [char=7]"

    def test_diagnostic_validation(self):
        """Test diagnostic validation rules."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            ParseDiagnostic("", 1)
        with pytest.raises(ValueError, match="position must be >= 1"):
            ParseDiagnostic("Error Parsing XML", 0)


class TestParseMetrics:
    """Test suite for ParseMetrics."""

    def test_defaults(self):
        """Test metrics start at zero."""
        metrics = ParseMetrics()

        assert metrics.events_emitted == 0
        assert metrics.event_type_distribution == {}
        assert metrics.characters_per_second == 0.0

    def test_add_event(self):
        """Test event counting by type."""
        metrics = ParseMetrics()
        for event_type in ("starttag", "text", "starttag"):
            metrics.add_event(event_type)

        assert metrics.events_emitted == 3
        assert metrics.event_type_distribution == {"starttag": 2, "text": 1}

    def test_characters_per_second(self):
        """Test throughput calculation."""
        metrics = ParseMetrics(characters_processed=500, processing_time_ms=250.0)
        assert metrics.characters_per_second == 2000.0
