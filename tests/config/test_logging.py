"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import date
from decimal import Decimal

import pytest
import structlog

from payadjust.config.logging import configure_logging
from payadjust.domain.employee import Employee
from payadjust.services.adjustment import SalaryAdjustmentService


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("payadjust").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_level_is_info(self) -> None:
        configure_logging()
        assert logging.getLogger("payadjust").level == logging.INFO

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        structlog.get_logger("payadjust.test").info("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "info"
        assert parsed["logger"] == "payadjust.test"
        assert "timestamp" in parsed

    def test_rejection_logged_at_info(
        self,
        capfd: pytest.CaptureFixture[str],
        service: SalaryAdjustmentService,
        make_employee: Callable[..., Employee],
    ) -> None:
        configure_logging(log_json=True)
        service.adjust_with_all(make_employee("10000", date(2026, 10, 1)), Decimal("20"))
        lines = [json.loads(line) for line in capfd.readouterr().err.splitlines()]
        assert len(lines) == 1
        assert lines[0]["level"] == "info"
        assert lines[0]["logger"] == "payadjust.services.adjustment"
        assert "minimum-interval" in lines[0]["event"]

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("urllib3").debug("noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1
