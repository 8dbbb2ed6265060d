"""Shared pytest fixtures and test helpers for payadjust tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from datetime import date
from decimal import Decimal

import pytest

from payadjust.domain.employee import Amount, Employee
from payadjust.domain.registry import RuleRegistry
from payadjust.domain.rules import (
    MINIMUM_INTERVAL,
    PERCENTAGE_CAP,
    MinimumIntervalRule,
    PercentageCapRule,
)
from payadjust.services.adjustment import SalaryAdjustmentService
from payadjust.services.telemetry import _current_span, disable_telemetry

TODAY = date(2026, 10, 19)
SIX_MONTHS_AGO = date(2026, 4, 19)
FIVE_MONTHS_29_DAYS_AGO = date(2026, 4, 20)
SEVEN_MONTHS_AGO = date(2026, 3, 19)

INTERVAL_REASON = "adjustment interval must be at least 6 months"
PERCENTAGE_REASON = "increase exceeds 40% of current salary"


def fixed_clock() -> date:
    return TODAY


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Telemetry is a ContextVar; keep tests from leaking it into each other."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and package logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("payadjust")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture(autouse=True)
def _no_payadjust_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip PAYADJUST_* env vars so settings tests start from code defaults."""
    for key in list(os.environ):
        if key.startswith("PAYADJUST_"):
            monkeypatch.delenv(key)


@pytest.fixture
def make_employee() -> Callable[..., Employee]:
    """Factory: ``make_employee(salary="10000", last=SEVEN_MONTHS_AGO)``."""

    def _make(salary: Amount = "10000", last: date = SEVEN_MONTHS_AGO) -> Employee:
        return Employee(Decimal(salary) if isinstance(salary, str) else salary, last)

    return _make


@pytest.fixture
def registry() -> RuleRegistry:
    """Standard registry: interval first, percentage second, interval default."""
    return RuleRegistry(
        [
            (MINIMUM_INTERVAL, MinimumIntervalRule(clock=fixed_clock)),
            (PERCENTAGE_CAP, PercentageCapRule()),
        ],
        default=MINIMUM_INTERVAL,
    )


@pytest.fixture
def service(registry: RuleRegistry) -> SalaryAdjustmentService:
    return SalaryAdjustmentService(registry, clock=fixed_clock)
