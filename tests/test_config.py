"""Tests for configuration and logging setup"""

import json
import logging

import pytest
from pydantic import ValidationError

from shiftpilot.config import DEFAULT_WEIGHTS, MatchingWeights, QualityThresholds, Settings
from shiftpilot.utils.logging import JsonFormatter, setup_logging


class TestSettings:
    """Environment-driven settings"""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.default_event_match_limit == 20
        assert config.default_volunteer_match_limit == 10
        assert config.suggestion_min_score == 70
        assert config.max_suggestions_per_event == 5
        assert config.auto_confirm_min_score == 80

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SHIFTPILOT_SUGGESTION_MIN_SCORE", "60")
        monkeypatch.setenv("SHIFTPILOT_LOG_LEVEL", "debug")

        config = Settings(_env_file=None)

        assert config.suggestion_min_score == 60
        assert config.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, auto_confirm_min_score=120)

    def test_validate_configuration(self):
        config = Settings(
            _env_file=None,
            app_env="production",
            app_debug=True,
            log_format="xml",
            suggestion_min_score=30,
            auto_confirm_min_score=20,
        )

        issues = config.validate_configuration()

        assert len(issues["errors"]) == 1
        assert "log_format" in issues["errors"][0]
        assert len(issues["warnings"]) == 3

    def test_clean_configuration(self):
        issues = Settings(_env_file=None, app_debug=False).validate_configuration()
        assert issues == {"errors": [], "warnings": []}


class TestMatchingConfiguration:
    def test_default_weights(self):
        assert DEFAULT_WEIGHTS.location == 0.35
        assert DEFAULT_WEIGHTS.skills == 0.30
        # Historic defaults over-allocate by 5%; totals are capped at 100
        assert DEFAULT_WEIGHTS.total == pytest.approx(1.05)

    def test_weights_are_bounded(self):
        with pytest.raises(ValidationError):
            MatchingWeights(location=1.5)

    def test_thresholds_are_frozen(self):
        thresholds = QualityThresholds()
        with pytest.raises(ValidationError):
            thresholds.excellent = 50


class TestLoggingSetup:
    """Root logger configuration"""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_logging(self):
        setup_logging(Settings(_env_file=None, log_format="json", log_level="WARNING"))

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_text_logging(self):
        setup_logging(Settings(_env_file=None, log_format="text"))

        formatter = logging.getLogger().handlers[0].formatter
        assert not isinstance(formatter, JsonFormatter)

    def test_json_formatter_output(self):
        record = logging.LogRecord(
            name="shiftpilot.services.matching",
            level=logging.ERROR,
            pathname=__file__,
            lineno=42,
            msg="Error matching volunteer %s",
            args=("vol_1",),
            exc_info=None,
        )

        payload = json.loads(JsonFormatter().format(record))

        assert payload["level"] == "ERROR"
        assert payload["logger"] == "shiftpilot.services.matching"
        assert payload["message"] == "Error matching volunteer vol_1"
        assert payload["line"] == 42
        assert "exception" not in payload
