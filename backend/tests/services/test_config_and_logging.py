"""Settings and structured logging."""

import json
import logging

import pytest
from pydantic import ValidationError

from dailypath.config import Settings
from dailypath.infrastructure.observability import JSONFormatter, setup_logging


def test_postgres_url_is_converted():
    settings = Settings(database_url="postgresql://u:p@h:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@h:5432/db"


def test_blank_baseline_is_unset():
    assert Settings(baseline_start_date="  ").baseline_start_date is None
    assert Settings(baseline_start_date="2025-09-01").baseline_start_date == "2025-09-01"


@pytest.mark.parametrize("value", ["2025-9-1", "2025-02-30", "yesterday"])
def test_malformed_baseline_is_rejected(value):
    with pytest.raises(ValidationError):
        Settings(baseline_start_date=value)


def test_defaults():
    settings = Settings(_env_file=None, admin_token="")
    assert settings.time_zone == "America/Los_Angeles"
    assert settings.results_dedup_enabled is True
    assert settings.game_title == "Daily Paths"


def test_json_formatter_includes_domain_extras():
    record = logging.LogRecord(
        "dailypath.test", logging.INFO, __file__, 1, "committed", None, None,
    )
    record.date_iso = "2025-09-03"
    record.level_index = 0
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "committed"
    assert payload["date_iso"] == "2025-09-03"
    assert payload["level_index"] == 0
    assert "source" not in payload


def test_setup_logging_does_not_stack_handlers():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("INFO", "text")
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert logging.root.level == logging.INFO
    finally:
        logging.root.handlers[:] = before
        logging.root.setLevel(level)
