"""Adjustment rule ABC and the concrete salary rules.

Every rule answers one question about a proposed increase and returns a
:class:`ValidationOutcome`. Rules never mutate the employee and never
depend on each other, so any subset can run in any registry order.

Zero or negative inputs that make a rule meaningless raise
:class:`~payadjust.domain.errors.PreconditionViolation` instead of
rejecting.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING

from payadjust.domain.employee import to_amount
from payadjust.domain.errors import (
    PreconditionViolation,
    RuleConfigurationError,
    ValidationRejected,
)

if TYPE_CHECKING:
    from payadjust.domain.employee import Amount, Employee

logger = logging.getLogger(__name__)

type Clock = Callable[[], date]

PERCENTAGE_CAP = "percentage-cap"
MINIMUM_INTERVAL = "minimum-interval"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a single rule evaluation: accepted, or rejected with a reason."""

    accepted: bool
    rule: str
    reason: str | None = None

    @classmethod
    def accept(cls, rule: str) -> ValidationOutcome:
        return cls(accepted=True, rule=rule)

    @classmethod
    def reject(cls, rule: str, reason: str) -> ValidationOutcome:
        return cls(accepted=False, rule=rule, reason=reason)

    @property
    def rejected(self) -> bool:
        return not self.accepted

    def raise_if_rejected(self) -> None:
        """Raise :class:`ValidationRejected` when this outcome is a rejection."""
        if self.rejected:
            raise ValidationRejected(self.reason or "rejected", rule=self.rule)


class AdjustmentRule(ABC):
    """Abstract base class for salary adjustment rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable rule identifier (e.g. 'percentage-cap')."""
        ...

    @abstractmethod
    def validate(self, employee: Employee, increase: Amount) -> ValidationOutcome:
        """Judge *increase* against *employee* without mutating it."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def months_between(start: date, end: date) -> int:
    """Whole calendar months from *start* to *end*, truncated toward zero.

    A month only counts once the day-of-month has been reached again, so
    2024-01-31 -> 2024-07-30 is 5 months. Negative when *end* precedes
    *start*.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and end.day < start.day:
        months -= 1
    elif months < 0 and end.day > start.day:
        months += 1
    return months


# ---------------------------------------------------------------------------
# Concrete rules
# ---------------------------------------------------------------------------


class PercentageCapRule(AdjustmentRule):
    """Reject increases above a fixed share of the current salary.

    The ratio is computed with ``ROUND_HALF_UP`` at *precision* significant
    digits, so a ratio of exactly ``max_ratio`` is always accepted.
    """

    def __init__(self, max_ratio: Decimal = Decimal("0.40"), *, precision: int = 28) -> None:
        if max_ratio < 0:
            raise RuleConfigurationError(f"max_ratio must be non-negative, got {max_ratio}")
        if precision < 1:
            raise RuleConfigurationError(f"precision must be at least 1, got {precision}")
        self._max_ratio = max_ratio
        self._precision = precision

    @property
    def name(self) -> str:
        return PERCENTAGE_CAP

    @property
    def max_ratio(self) -> Decimal:
        return self._max_ratio

    @property
    def reason(self) -> str:
        percent = (self._max_ratio * 100).normalize()
        return f"increase exceeds {percent:f}% of current salary"

    def ratio(self, salary: Decimal, increase: Decimal) -> Decimal:
        """Return ``increase / salary`` rounded half-up at the rule precision."""
        if salary <= 0:
            raise PreconditionViolation(
                f"{self.name} requires a positive current salary, got {salary}"
            )
        with localcontext() as ctx:
            ctx.prec = self._precision
            ctx.rounding = ROUND_HALF_UP
            return increase / salary

    def validate(self, employee: Employee, increase: Amount) -> ValidationOutcome:
        amount = to_amount(increase, label="increase")
        ratio = self.ratio(employee.salary, amount)
        logger.debug("%s: ratio=%s max=%s", self.name, ratio, self._max_ratio)
        if ratio > self._max_ratio:
            return ValidationOutcome.reject(self.name, self.reason)
        return ValidationOutcome.accept(self.name)


class MinimumIntervalRule(AdjustmentRule):
    """Reject adjustments made too soon after the previous one.

    Elapsed time is measured in whole calendar months (see
    :func:`months_between`) up to the date returned by *clock*.
    """

    def __init__(self, min_months: int = 6, *, clock: Clock = date.today) -> None:
        if min_months < 0:
            raise RuleConfigurationError(f"min_months must be non-negative, got {min_months}")
        self._min_months = min_months
        self._clock = clock

    @property
    def name(self) -> str:
        return MINIMUM_INTERVAL

    @property
    def min_months(self) -> int:
        return self._min_months

    @property
    def reason(self) -> str:
        return f"adjustment interval must be at least {self._min_months} months"

    def validate(self, employee: Employee, increase: Amount) -> ValidationOutcome:
        elapsed = months_between(employee.last_adjustment_date, self._clock())
        logger.debug("%s: elapsed=%d min=%d", self.name, elapsed, self._min_months)
        if elapsed < self._min_months:
            return ValidationOutcome.reject(self.name, self.reason)
        return ValidationOutcome.accept(self.name)
