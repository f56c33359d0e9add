"""Composite rules: unit, conditional and activation groups."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from ruleflow.core.errors import CompositeRuleError
from ruleflow.core.facts import Facts

from .base import DEFAULT_DESCRIPTION, DEFAULT_NAME, Rule


class CompositeKind(str, Enum):
    """Combination policies for composite rules."""

    UNIT = "UnitRuleGroup"
    CONDITIONAL = "ConditionalRuleGroup"
    ACTIVATION = "ActivationRuleGroup"

    @classmethod
    def parse(cls, value: CompositeKind | str) -> CompositeKind:
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(kind.value for kind in cls)
            raise CompositeRuleError(
                f"Invalid composite rule type, must be one of [{names}]"
            ) from None


# Minimum number of composing rules per kind
_MIN_RULES = {
    CompositeKind.UNIT: 1,
    CompositeKind.CONDITIONAL: 2,
    CompositeKind.ACTIVATION: 1,
}


class CompositeRule(Rule):
    """A rule derived from an ordered list of composing rules.

    The ``kind`` selects the combination policy:

    - UNIT: triggers when every composing rule triggers; executes all of
      them in natural order.
    - CONDITIONAL: the first registered rule is the gate; when it triggers,
      the remaining rules' actions run in registration order regardless of
      their own conditions.
    - ACTIVATION: triggers when any composing rule triggers; executes only
      the first triggered rule in natural order.

    ``execute`` acts on the outcome of the most recent ``evaluate`` call, so
    a group that has not been evaluated, or evaluated false, does nothing. A
    group used as a conditional consequent runs through
    ``execute_unconditionally`` instead.

    Without an explicit priority the group takes the lowest priority value of
    its composing rules. Priority is part of a rule's identity and sort key,
    so ``add_rule`` and ``remove_rule`` refuse changes that would move a
    derived priority.
    """

    def __init__(
        self,
        kind: CompositeKind | str,
        name: str = DEFAULT_NAME,
        description: str = DEFAULT_DESCRIPTION,
        priority: int | None = None,
        composing_rules: Iterable[Rule] | None = None,
    ):
        self.kind = CompositeKind.parse(kind)
        self._composing_rules: list[Rule] = []
        for rule in composing_rules or ():
            if rule is None:
                raise CompositeRuleError("Composing rules must not be None")
            if rule not in self._composing_rules:
                self._composing_rules.append(rule)
        self._check_size(self._composing_rules)
        self._triggered = False
        self._selected: Rule | None = None
        super().__init__(name, description, priority)

    @classmethod
    def unit(cls, name: str = DEFAULT_NAME, description: str = DEFAULT_DESCRIPTION,
             priority: int | None = None, composing_rules: Iterable[Rule] | None = None) -> CompositeRule:
        return cls(CompositeKind.UNIT, name, description, priority, composing_rules)

    @classmethod
    def conditional(cls, name: str = DEFAULT_NAME, description: str = DEFAULT_DESCRIPTION,
                    priority: int | None = None, composing_rules: Iterable[Rule] | None = None) -> CompositeRule:
        return cls(CompositeKind.CONDITIONAL, name, description, priority, composing_rules)

    @classmethod
    def activation(cls, name: str = DEFAULT_NAME, description: str = DEFAULT_DESCRIPTION,
                   priority: int | None = None, composing_rules: Iterable[Rule] | None = None) -> CompositeRule:
        return cls(CompositeKind.ACTIVATION, name, description, priority, composing_rules)

    # -------------------------------------------------------------------------
    # Priority and composition
    # -------------------------------------------------------------------------

    @property
    def priority(self) -> int:
        if self._priority is not None:
            return self._priority
        return min(rule.priority for rule in self._composing_rules)

    @priority.setter
    def priority(self, value: int | None) -> None:
        self._priority = value

    @property
    def composing_rules(self) -> tuple[Rule, ...]:
        """Composing rules in registration order."""
        return tuple(self._composing_rules)

    def add_rule(self, rule: Rule) -> None:
        if rule is None:
            raise CompositeRuleError("Composing rules must not be None")
        if rule not in self._composing_rules:
            updated = [*self._composing_rules, rule]
            self._check_priority(updated)
            self._composing_rules = updated

    def remove_rule(self, rule: Rule) -> None:
        remaining = [r for r in self._composing_rules if r != rule]
        self._check_size(remaining)
        self._check_priority(remaining)
        self._composing_rules = remaining

    def _check_priority(self, rules: list[Rule]) -> None:
        if self._priority is None and min(r.priority for r in rules) != self.priority:
            raise CompositeRuleError(
                f"Changing the composing rules of '{self.name}' would change its derived "
                "priority; set an explicit priority first"
            )

    def _check_size(self, rules: list[Rule]) -> None:
        if not rules:
            raise CompositeRuleError("composing rules required")
        minimum = _MIN_RULES[self.kind]
        if len(rules) < minimum:
            raise CompositeRuleError(
                f"{self.kind.value} requires at least {minimum} composing rules"
            )

    # -------------------------------------------------------------------------
    # Rule contract
    # -------------------------------------------------------------------------

    def evaluate(self, facts: Facts) -> bool:
        self._triggered = False
        self._selected = None

        if self.kind is CompositeKind.UNIT:
            self._triggered = all(rule.evaluate(facts) for rule in sorted(self._composing_rules))
        elif self.kind is CompositeKind.CONDITIONAL:
            self._triggered = bool(self._composing_rules[0].evaluate(facts))
        elif self.kind is CompositeKind.ACTIVATION:
            for rule in sorted(self._composing_rules):
                if rule.evaluate(facts):
                    self._selected = rule
                    break
            self._triggered = self._selected is not None
        return self._triggered

    def execute(self, facts: Facts) -> None:
        if not self._triggered:
            return

        if self.kind is CompositeKind.UNIT:
            for rule in sorted(self._composing_rules):
                rule.execute(facts)
        elif self.kind is CompositeKind.CONDITIONAL:
            for rule in self._composing_rules[1:]:
                _execute_unconditionally(rule, facts)
        elif self.kind is CompositeKind.ACTIVATION:
            self._selected.execute(facts)

    def execute_unconditionally(self, facts: Facts) -> None:
        """Run the group's actions, ignoring its own condition.

        Unit and conditional groups run all their actions (conditional
        groups skip the gate). Activation groups still need a triggered
        composing rule to select.
        """
        if self.kind is CompositeKind.UNIT:
            for rule in sorted(self._composing_rules):
                _execute_unconditionally(rule, facts)
        elif self.kind is CompositeKind.CONDITIONAL:
            for rule in self._composing_rules[1:]:
                _execute_unconditionally(rule, facts)
        elif self.kind is CompositeKind.ACTIVATION:
            if self.evaluate(facts):
                self._selected.execute(facts)

    def __repr__(self) -> str:
        return (
            f"CompositeRule(kind={self.kind.value}, name={self.name!r}, "
            f"priority={self.priority}, composing_rules={[r.name for r in self._composing_rules]})"
        )


def _execute_unconditionally(rule: Rule, facts: Facts) -> None:
    if isinstance(rule, CompositeRule):
        rule.execute_unconditionally(facts)
    else:
        rule.execute(facts)
