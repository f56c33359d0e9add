"""Ordered, duplicate-free collection of rules."""

from __future__ import annotations

from bisect import insort
from typing import Iterable, Iterator

from ruleflow.core.errors import require_not_none

from .base import Rule


class RuleSet:
    """Rules kept in natural order (priority, then name).

    Registering a rule equal to one already present is a no-op.
    """

    def __init__(self, *rules: Rule | Iterable[Rule]):
        self._rules: list[Rule] = []
        for item in rules:
            if isinstance(item, Rule) or item is None:
                self.register(item)
            else:
                self.register(*item)

    def register(self, *rules: Rule) -> None:
        """Register one or more rules."""
        for rule in rules:
            require_not_none(rule, "Rule must not be None")
            if rule not in self._rules:
                insort(self._rules, rule, key=Rule.sort_key)

    def unregister(self, *rules: Rule | str) -> None:
        """Unregister rules, given as rule objects or rule names."""
        for rule in rules:
            require_not_none(rule, "Rule must not be None")
            if isinstance(rule, str):
                self.unregister_by_name(rule)
            elif rule in self._rules:
                self._rules.remove(rule)

    def unregister_by_name(self, name: str) -> None:
        require_not_none(name, "Rule name must not be None")
        self._rules = [rule for rule in self._rules if rule.name != name]

    def find(self, name: str) -> Rule | None:
        """Return the first rule registered under ``name``."""
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def clear(self) -> None:
        self._rules.clear()

    def is_empty(self) -> bool:
        return not self._rules

    def __contains__(self, rule: object) -> bool:
        return rule in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({', '.join(rule.name for rule in self._rules)})"
