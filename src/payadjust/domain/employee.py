"""Employee record — the only aggregate a salary adjustment mutates.

INVARIANT: ``salary >= 0`` at all times.
INVARIANT: Salary and last-adjustment date change together, and only
through :meth:`Employee.apply_increase`.

Money is always :class:`~decimal.Decimal`. Floats are refused at the
boundary so binary rounding never leaks into a salary.
"""

from __future__ import annotations

import threading
from datetime import date
from decimal import Decimal, Inexact, InvalidOperation, localcontext

from payadjust.domain.errors import PreconditionViolation

type Amount = Decimal | int | str


def to_amount(value: Amount, *, label: str = "amount") -> Decimal:
    """Coerce *value* to a finite, non-negative Decimal.

    Raises:
        PreconditionViolation: for floats, unparsable input, NaN/infinity,
            or negative values.
    """
    if isinstance(value, float | bool):
        msg = f"{label} must be a Decimal, int or numeric string, got {type(value).__name__}"
        raise PreconditionViolation(msg)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise PreconditionViolation(f"{label} is not a decimal amount: {value!r}") from exc
    if not amount.is_finite():
        raise PreconditionViolation(f"{label} must be finite, got {amount}")
    if amount < 0:
        raise PreconditionViolation(f"{label} must be non-negative, got {amount}")
    return amount


def exact_sum_digits(*values: Decimal) -> int:
    """Significant digits needed to hold the sum of finite *values* exactly."""
    top = max(value.adjusted() for value in values)
    bottom = min(int(value.as_tuple().exponent) for value in values)
    return top - bottom + 2


class Employee:
    """Current salary plus the date it was last adjusted.

    Each record owns a re-entrant lock. Anything that reads the salary to
    decide on a mutation (validation followed by :meth:`apply_increase`)
    must hold :attr:`lock` for the whole sequence.
    """

    __slots__ = ("_last_adjustment_date", "_lock", "_salary")

    def __init__(self, salary: Amount, last_adjustment_date: date) -> None:
        self._salary = to_amount(salary, label="salary")
        self._last_adjustment_date = last_adjustment_date
        self._lock = threading.RLock()

    @property
    def salary(self) -> Decimal:
        return self._salary

    @property
    def last_adjustment_date(self) -> date:
        return self._last_adjustment_date

    @property
    def lock(self) -> threading.RLock:
        """Per-record critical-section lock."""
        return self._lock

    def apply_increase(self, increase: Amount, *, on: date) -> Decimal:
        """Add *increase* to the salary and stamp *on* as the adjustment date.

        Both fields are written under the record lock. The addition runs at
        whatever precision the exact sum needs, with the ``Inexact`` trap
        still enabled.

        Returns:
            The new salary.
        """
        amount = to_amount(increase, label="increase")
        with self._lock:
            with localcontext() as ctx:
                ctx.prec = max(ctx.prec, exact_sum_digits(self._salary, amount))
                ctx.traps[Inexact] = True
                try:
                    new_salary = self._salary + amount
                except Inexact as exc:
                    msg = f"salary {self._salary} + {amount} is not exactly representable"
                    raise PreconditionViolation(msg) from exc
            self._salary = new_salary
            self._last_adjustment_date = on
        return new_salary

    def __repr__(self) -> str:
        return (
            f"Employee(salary={self._salary!r}, "
            f"last_adjustment_date={self._last_adjustment_date!r})"
        )
