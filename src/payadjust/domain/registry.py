"""Rule registry — ordered, read-only map of identifier to rule.

Built once at composition time. Iteration order is registration order;
exactly one registered identifier is the default.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import TYPE_CHECKING

from payadjust.domain.errors import RuleConfigurationError, UnknownRuleError

if TYPE_CHECKING:
    from payadjust.domain.rules import AdjustmentRule


class RuleRegistry:
    """Ordered collection of ``(identifier, rule)`` pairs plus a default.

    Raises:
        RuleConfigurationError: if the registry is empty, an identifier
            repeats, or *default* is not registered.
    """

    def __init__(self, rules: Iterable[tuple[str, AdjustmentRule]], *, default: str) -> None:
        entries: dict[str, AdjustmentRule] = {}
        for name, rule in rules:
            if name in entries:
                raise RuleConfigurationError(f"Duplicate rule identifier: {name!r}")
            entries[name] = rule
        if not entries:
            raise RuleConfigurationError("Rule registry must contain at least one rule")
        if default not in entries:
            raise RuleConfigurationError(
                f"Default rule {default!r} is not registered. Registered: {list(entries)}"
            )
        self._rules = MappingProxyType(entries)
        self._default = default

    @classmethod
    def of(cls, *rules: AdjustmentRule, default: str | None = None) -> RuleRegistry:
        """Register *rules* under their own names; default to the first."""
        if default is None and rules:
            default = rules[0].name
        return cls(((rule.name, rule) for rule in rules), default=default or "")

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._rules)

    @property
    def default_name(self) -> str:
        return self._default

    @property
    def default(self) -> AdjustmentRule:
        return self._rules[self._default]

    def get(self, name: str) -> AdjustmentRule:
        """Look up a rule by identifier.

        Raises:
            UnknownRuleError: if *name* is not registered.
        """
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownRuleError(name, self.names) from None

    def __iter__(self) -> Iterator[tuple[str, AdjustmentRule]]:
        return iter(self._rules.items())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __repr__(self) -> str:
        return f"RuleRegistry(names={list(self._rules)!r}, default={self._default!r})"
