"""SalaryAdjustmentService — rule-guarded salary increases.

Pipeline: SELECT → VALIDATE → APPLY → RESPOND

Three selection modes share the same VALIDATE/APPLY stages:
- default: only the registry's designated default rule
- named: one rule chosen by identifier
- all: every registered rule, in registration order

INVARIANT: The employee is either fully updated (salary and date) or left
untouched. VALIDATE and APPLY run inside one critical section per employee.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import TYPE_CHECKING

from payadjust.domain.employee import to_amount
from payadjust.domain.errors import UnknownRuleError
from payadjust.services.result import ErrorCode, ServiceError, ServiceResult
from payadjust.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from payadjust.domain.employee import Amount, Employee
    from payadjust.domain.registry import RuleRegistry
    from payadjust.domain.rules import AdjustmentRule, Clock

logger = logging.getLogger(__name__)


class SalaryAdjustmentService:
    """Applies a salary increase once the selected rules accept it.

    The service keeps no state besides the read-only registry and the
    clock used to stamp the adjustment date.
    """

    def __init__(self, registry: RuleRegistry, *, clock: Clock = date.today) -> None:
        self._registry = registry
        self._clock = clock

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def adjust_with_default(self, employee: Employee, increase: Amount) -> ServiceResult:
        """Validate with the registry's default rule, then apply."""
        selected = [(self._registry.default_name, self._registry.default)]
        return self._adjust("adjust_with_default", employee, increase, selected)

    @traced
    def adjust_with_rule(
        self,
        employee: Employee,
        increase: Amount,
        rule_name: str,
    ) -> ServiceResult:
        """Validate with the rule registered as *rule_name*, then apply."""
        op = "adjust_with_rule"
        try:
            rule = self._registry.get(rule_name)
        except UnknownRuleError as exc:
            logger.warning("Unknown adjustment rule requested: %s", rule_name)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorCode.UNKNOWN_RULE,
                    message=str(exc),
                    detail={"rule": rule_name, "available": list(exc.available)},
                ),
            )
        return self._adjust(op, employee, increase, [(rule_name, rule)])

    @traced
    def adjust_with_all(self, employee: Employee, increase: Amount) -> ServiceResult:
        """Validate with every registered rule in order, then apply.

        The first rejection aborts; later rules are not evaluated.
        """
        return self._adjust("adjust_with_all", employee, increase, list(self._registry))

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _adjust(
        self,
        op: str,
        employee: Employee,
        increase: Amount,
        selected: Sequence[tuple[str, AdjustmentRule]],
    ) -> ServiceResult:
        amount = to_amount(increase, label="increase")
        evaluated: list[str] = []

        with employee.lock:
            # ── VALIDATE ─────────────────────────────────────────
            for name, rule in selected:
                with trace_span(f"rule:{name}") as span:
                    outcome = rule.validate(employee, amount)
                    if span is not None:
                        span.annotate("accepted", outcome.accepted)
                evaluated.append(name)

                if outcome.rejected:
                    reason = outcome.reason or "rejected"
                    logger.info("Adjustment rejected by %s: %s", name, reason)
                    return ServiceResult(
                        ok=False,
                        op=op,
                        error=ServiceError(
                            code=ErrorCode.VALIDATION_REJECTED,
                            message=reason,
                            detail={"rule": name, "evaluated": evaluated},
                        ),
                    )

            # ── APPLY ────────────────────────────────────────────
            previous_salary = employee.salary
            previous_date = employee.last_adjustment_date
            today = self._clock()
            new_salary = employee.apply_increase(amount, on=today)

        logger.info(
            "Salary adjusted from %s to %s (rules: %s)",
            previous_salary,
            new_salary,
            ", ".join(evaluated),
        )

        # ── RESPOND ──────────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "previous_salary": str(previous_salary),
                "salary": str(new_salary),
                "increase": str(amount),
                "previous_adjustment_date": previous_date.isoformat(),
                "adjustment_date": today.isoformat(),
                "rules": evaluated,
            },
        )
