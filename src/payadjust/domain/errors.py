"""Exception hierarchy for payadjust.

Two families that must never be confused:

- Business outcomes (:class:`ValidationRejected`): expected, recoverable,
  carry a human-readable reason. Callers fix their input and try again.
- Faults (:class:`PreconditionViolation`, :class:`ConfigurationError`):
  programming or data-integrity errors. Fatal to the current operation.
"""

from __future__ import annotations


class PayadjustError(Exception):
    """Base class for every error raised by payadjust."""


class ValidationRejected(PayadjustError):
    """An adjustment rule rejected the proposed increase."""

    def __init__(self, reason: str, *, rule: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.rule = rule


class PreconditionViolation(PayadjustError):
    """Input that no rule can meaningfully judge (e.g. a zero salary)."""


class ConfigurationError(PayadjustError):
    """Raised when configuration values are invalid."""


class RuleConfigurationError(ConfigurationError):
    """Raised when a rule or the rule registry is wired incorrectly."""


class UnknownRuleError(RuleConfigurationError):
    """Raised when a rule identifier is not present in the registry."""

    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        super().__init__(f"Unknown adjustment rule: {name!r}. Available: {list(available)}")
        self.name = name
        self.available = available
