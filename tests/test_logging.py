"""Tests for logging helpers."""

from datetime import date

import pytest
import structlog
from structlog.testing import capture_logs

from recur import daily_occurrences, get_logger
from recur.logging import configure_logging, render_dates, timed_block


class TestLogging:
    """Test structlog integration."""

    def test_calculator_emits_debug_event(self):
        """Each calculation logs kind, count and attempts."""
        with capture_logs() as logs:
            daily_occurrences(date(2024, 1, 1), date(2024, 1, 1), 2, 1)

        event = next(e for e in logs if e["event"] == "occurrences_computed")
        assert event["kind"] == "daily"
        assert event["count"] == 2
        assert event["attempts"] == 3

    def test_timed_block(self):
        """timed_block logs elapsed milliseconds and extra fields."""
        log = get_logger("test")
        with capture_logs() as logs:
            with timed_block(log, "work_done", level="info", items=3):
                pass

        assert logs[0]["event"] == "work_done"
        assert logs[0]["items"] == 3
        assert logs[0]["elapsed_ms"] >= 0

    def test_render_dates(self):
        """Date fields become ISO strings, other fields are untouched."""
        event = render_dates(
            None,
            "info",
            {"event": "x", "anchor": date(2024, 3, 6), "count": 2},
        )
        assert event == {"event": "x", "anchor": "2024-03-06", "count": 2}

    @pytest.mark.parametrize("json_output", [True, False])
    def test_configure_logging_renders_dates(self, json_output):
        """configure_logging installs the date renderer before the output renderer."""
        try:
            configure_logging(level="INFO", json_output=json_output)
            assert structlog.is_configured()
            processors = structlog.get_config()["processors"]
            assert render_dates in processors
            assert processors.index(render_dates) < len(processors) - 1
        finally:
            structlog.reset_defaults()
