# tests/core/test_core.py

import json
import logging

import pytest

from metrycs.core.audit import AuditAction, AuditLogger
from metrycs.core.config import Settings
from metrycs.core.ratios import clamp, clamp_unit, round_half_away, safe_ratio


class TestRatios:
    def test_safe_ratio(self):
        assert safe_ratio(1, 4) == 0.25
        assert safe_ratio(5, 0) == 0.0
        assert safe_ratio(5, 0, default=1.0) == 1.0

    def test_clamp(self):
        assert clamp(150, 0, 100) == 100
        assert clamp(-3, 0, 100) == 0
        assert clamp_unit(1.2) == 1.0
        assert clamp_unit(0.4) == 0.4

    @pytest.mark.parametrize(
        "value,expected", [(2.5, 3), (-2.5, -3), (0.5, 1), (2.4, 2), (-0.4, 0)]
    )
    def test_round_half_away(self, value, expected):
        assert round_half_away(value) == expected


class TestSettings:
    def test_normalizes_values(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("API_PREFIX", "v1/")

        settings = Settings()

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.API_PREFIX == "/v1"

    def test_random_seed_is_optional(self, monkeypatch):
        monkeypatch.delenv("RANDOM_SEED", raising=False)

        assert Settings().RANDOM_SEED is None


class TestAuditLogger:
    def test_writes_json_entry(self, caplog):
        audit = AuditLogger(enabled=True)

        with caplog.at_level(logging.INFO, logger="audit"):
            audit.log_metrics_export("evt_1", "csv")

        entry = json.loads(caplog.records[-1].getMessage())
        assert entry["action"] == AuditAction.METRICS_EXPORTED.value
        assert entry["resource_id"] == "evt_1"
        assert entry["details"] == {"format": "csv"}
        assert entry["service"] == "event-metrycs"

    def test_disabled_logger_is_silent(self, mocker):
        mock_logger = mocker.patch("metrycs.core.audit.logger")

        AuditLogger(enabled=False).log_report_generated("evt_1", 3, 4, 80)

        mock_logger.info.assert_not_called()
