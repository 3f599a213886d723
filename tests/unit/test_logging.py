"""Unit tests for coverscout.utils.logging."""

from __future__ import annotations

import io
import json
import logging

import pytest

from coverscout.utils.errors import ConfigurationError
from coverscout.utils.logging import configure_logging, get_logger

pytestmark = pytest.mark.usefixtures("reset_logging")


def _json_lines(buf: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in buf.getvalue().splitlines() if line.strip()]


class TestConfigureLogging:
    def test_json_lines_carry_event_and_context(self) -> None:
        buf = io.StringIO()
        configure_logging(log_level="INFO", json_output=True, stream=buf)

        get_logger("coverscout.tests").info("covers_scrape_started", artist="Moby")

        [entry] = _json_lines(buf)
        assert entry["event"] == "covers_scrape_started"
        assert entry["artist"] == "Moby"
        assert entry["level"] == "info"
        assert entry["logger_name"] == "coverscout.tests"
        assert "timestamp" in entry

    def test_drops_events_below_level(self) -> None:
        buf = io.StringIO()
        configure_logging(log_level="warning", json_output=True, stream=buf)
        logger = get_logger("coverscout.tests")

        logger.info("flaresolverr_fetch_complete")
        logger.warning("flaresolverr_attempt_failed")

        assert [e["event"] for e in _json_lines(buf)] == ["flaresolverr_attempt_failed"]

    def test_production_env_selects_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        buf = io.StringIO()
        configure_logging(stream=buf)

        get_logger("coverscout.tests").info("app_startup")

        assert _json_lines(buf)[0]["event"] == "app_startup"

    def test_console_output_has_no_colour_codes_off_a_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "development")
        buf = io.StringIO()
        configure_logging(stream=buf)

        get_logger("coverscout.tests").info("app_startup")

        assert "app_startup" in buf.getvalue()
        assert "\x1b[" not in buf.getvalue()

    def test_stdlib_records_share_the_stream(self) -> None:
        buf = io.StringIO()
        configure_logging(log_level="INFO", json_output=True, stream=buf)

        logging.getLogger("uvicorn.error").warning("Started server process")

        assert _json_lines(buf)[0]["event"] == "Started server process"

    def test_http_client_loggers_stay_at_warning(self) -> None:
        configure_logging(log_level="DEBUG", stream=io.StringIO())

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_unknown_level_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            configure_logging(log_level="chatty", stream=io.StringIO())
