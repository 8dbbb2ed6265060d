"""Composition root — build the standard registry and service from settings.

The service itself never reads configuration; callers may bypass this
module entirely and hand-build a :class:`RuleRegistry`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from payadjust.config.logging import configure_logging
from payadjust.config.models import RulesConfig
from payadjust.config.settings import PayadjustSettings
from payadjust.domain.errors import RuleConfigurationError
from payadjust.domain.registry import RuleRegistry
from payadjust.domain.rules import (
    MINIMUM_INTERVAL,
    PERCENTAGE_CAP,
    AdjustmentRule,
    Clock,
    MinimumIntervalRule,
    PercentageCapRule,
)
from payadjust.services.adjustment import SalaryAdjustmentService
from payadjust.services.telemetry import enable_telemetry

logger = logging.getLogger(__name__)

RULE_FACTORIES: dict[str, Callable[[RulesConfig, Clock], AdjustmentRule]] = {
    PERCENTAGE_CAP: lambda cfg, _clock: PercentageCapRule(
        cfg.percentage_cap.max_ratio,
        precision=cfg.percentage_cap.precision,
    ),
    MINIMUM_INTERVAL: lambda cfg, clock: MinimumIntervalRule(
        cfg.minimum_interval.min_months,
        clock=clock,
    ),
}


def build_registry(
    settings: PayadjustSettings | None = None,
    *,
    clock: Clock = date.today,
) -> RuleRegistry:
    """Instantiate the configured rules in the configured order.

    Raises:
        RuleConfigurationError: for unknown identifiers in ``rules.order``,
            duplicates, or a default that is not in the order.
    """
    cfg = (settings or PayadjustSettings.load()).rules
    unknown = [name for name in cfg.order if name not in RULE_FACTORIES]
    if unknown:
        raise RuleConfigurationError(
            f"Unknown rule identifiers in configuration: {unknown}. "
            f"Known: {sorted(RULE_FACTORIES)}"
        )
    registry = RuleRegistry(
        ((name, RULE_FACTORIES[name](cfg, clock)) for name in cfg.order),
        default=cfg.default,
    )
    logger.debug("Built %r", registry)
    return registry


def build_service(
    settings: PayadjustSettings | None = None,
    *,
    clock: Clock = date.today,
) -> SalaryAdjustmentService:
    """Configure logging, then build a service over the configured registry.

    The interval rule and the service share *clock*. ``verbose`` also turns
    on telemetry spans in ``ServiceResult.meta``.
    """
    settings = settings or PayadjustSettings.load()
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    if settings.verbose:
        enable_telemetry()
    return SalaryAdjustmentService(build_registry(settings, clock=clock), clock=clock)
