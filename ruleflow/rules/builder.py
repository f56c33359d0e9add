"""Fluent builder turning plain callables into rules.

Callables receive facts through an explicit binding list::

    rule = (
        RuleBuilder()
        .name("adult rule")
        .priority(1)
        .when(lambda age: age >= 18, facts=["age"])
        .then(lambda person: person.update(adult=True), facts=["person"])
        .build()
    )

With no declared bindings a callable receives the ``Facts`` object itself.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from ruleflow.core.config import DEFAULT_PRIORITY
from ruleflow.core.errors import NoSuchFactError
from ruleflow.core.facts import Facts

from .base import DEFAULT_NAME, DefaultRule

logger = logging.getLogger(__name__)


class BoundCallable:
    """A callable invoked with facts resolved from a declared binding list."""

    def __init__(self, func: Callable[..., Any], facts: Sequence[str] | None = None):
        if not callable(func):
            raise TypeError(f"Not callable: {func!r}")
        self.func = func
        self.bindings = tuple(facts or ())

    @property
    def name(self) -> str:
        return getattr(self.func, "__name__", type(self.func).__name__)

    def arguments(self, facts: Facts) -> list[Any]:
        if not self.bindings:
            return [facts]
        return [facts.require(name) for name in self.bindings]

    def __call__(self, facts: Facts) -> Any:
        return self.func(*self.arguments(facts))


class BoundCondition(BoundCallable):
    """Condition whose missing fact bindings make it evaluate false."""

    def evaluate(self, facts: Facts) -> bool:
        try:
            arguments = self.arguments(facts)
        except NoSuchFactError as e:
            logger.warning(
                "Condition '%s' evaluated to false due to a declared but missing fact '%s' in %s",
                self.name, e.fact_name, facts,
            )
            return False
        return bool(self.func(*arguments))


class BoundAction(BoundCallable):
    """Action whose missing fact bindings raise NoSuchFactError."""

    def execute(self, facts: Facts) -> None:
        self(facts)


class RuleBuilder:
    """Builds a DefaultRule from a condition and ordered actions."""

    def __init__(self):
        self._name = DEFAULT_NAME
        self._description: str | None = None
        self._priority = DEFAULT_PRIORITY
        self._condition: BoundCondition | None = None
        self._actions: list[BoundAction] = []

    def name(self, name: str) -> RuleBuilder:
        self._name = name
        return self

    def description(self, description: str) -> RuleBuilder:
        self._description = description
        return self

    def priority(self, priority: int) -> RuleBuilder:
        self._priority = priority
        return self

    def when(self, condition: Callable[..., Any], facts: Sequence[str] | None = None) -> RuleBuilder:
        """Set the rule condition, binding ``facts`` positionally."""
        self._condition = BoundCondition(condition, facts)
        return self

    def then(self, action: Callable[..., Any], facts: Sequence[str] | None = None) -> RuleBuilder:
        """Append an action, binding ``facts`` positionally."""
        self._actions.append(BoundAction(action, facts))
        return self

    def build(self) -> DefaultRule:
        return DefaultRule(
            name=self._name,
            description=self._description or self._default_description(),
            priority=self._priority,
            condition=self._condition,
            actions=self._actions,
        )

    def _default_description(self) -> str:
        # "when <condition> then <action1>,<action2>"
        parts = []
        if self._condition is not None:
            parts.append(f"when {self._condition.name} then ")
        parts.append(",".join(action.name for action in self._actions))
        return "".join(parts)
