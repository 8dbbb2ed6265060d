"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, payadjust.toml only contains
overrides. An empty file yields the standard two-rule registry.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class PercentageCapConfig(BaseModel):
    """[rules.percentage_cap] section."""

    model_config = {"frozen": True}

    max_ratio: Decimal = Field(default=Decimal("0.40"), ge=0)
    precision: int = Field(default=28, ge=1)


class MinimumIntervalConfig(BaseModel):
    """[rules.minimum_interval] section."""

    model_config = {"frozen": True}

    min_months: int = Field(default=6, ge=0)


class RulesConfig(BaseModel):
    """[rules] section.

    ``order`` is the registration order used by adjust-with-all;
    ``default`` names the rule used by adjust-with-default.
    """

    model_config = {"frozen": True}

    order: list[str] = Field(default_factory=lambda: ["minimum-interval", "percentage-cap"])
    default: str = "minimum-interval"
    percentage_cap: PercentageCapConfig = Field(default_factory=PercentageCapConfig)
    minimum_interval: MinimumIntervalConfig = Field(default_factory=MinimumIntervalConfig)
