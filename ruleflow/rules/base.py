"""Rule contract and the default condition/action rule."""

from __future__ import annotations

from functools import total_ordering
from typing import Any, Callable, Iterable, Protocol, Union, runtime_checkable

from ruleflow.core.config import DEFAULT_PRIORITY
from ruleflow.core.facts import Facts

DEFAULT_NAME = "rule"
DEFAULT_DESCRIPTION = "description"


@runtime_checkable
class Condition(Protocol):
    """Side-effect free predicate over facts."""

    def evaluate(self, facts: Facts) -> bool: ...


@runtime_checkable
class Action(Protocol):
    """Operation run against facts when a rule's condition holds."""

    def execute(self, facts: Facts) -> None: ...


ConditionLike = Union[Condition, Callable[[Facts], Any]]
ActionLike = Union[Action, Callable[[Facts], Any]]


def as_condition(condition: ConditionLike) -> Callable[[Facts], Any]:
    """Normalize a Condition object or plain callable to a callable."""
    if isinstance(condition, Condition):
        return condition.evaluate
    if callable(condition):
        return condition
    raise TypeError(f"Not a condition: {condition!r}")


def as_action(action: ActionLike) -> Callable[[Facts], Any]:
    """Normalize an Action object or plain callable to a callable."""
    if isinstance(action, Action):
        return action.execute
    if callable(action):
        return action
    raise TypeError(f"Not an action: {action!r}")


@total_ordering
class Rule:
    """Base rule.

    Rules are ordered by priority (lower first) then name, and are equal when
    name, description and priority are all equal. Subclasses override
    ``evaluate`` and ``execute``; the base rule never triggers.
    """

    def __init__(
        self,
        name: str = DEFAULT_NAME,
        description: str = DEFAULT_DESCRIPTION,
        priority: int = DEFAULT_PRIORITY,
    ):
        self.name = name
        self.description = description
        self.priority = priority

    def evaluate(self, facts: Facts) -> bool:
        """Return True when the rule should be applied to ``facts``."""
        return False

    def execute(self, facts: Facts) -> None:
        """Apply the rule's actions to ``facts``."""

    def sort_key(self) -> tuple[int, str]:
        return (self.priority, self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return (
            self.priority == other.priority
            and self.name == other.name
            and self.description == other.description
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash((self.name, self.description, self.priority))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"description={self.description!r}, priority={self.priority})"
        )


class DefaultRule(Rule):
    """Rule built from one condition and an ordered list of actions."""

    def __init__(
        self,
        name: str = DEFAULT_NAME,
        description: str = DEFAULT_DESCRIPTION,
        priority: int = DEFAULT_PRIORITY,
        condition: ConditionLike | None = None,
        actions: Iterable[ActionLike] = (),
    ):
        super().__init__(name, description, priority)
        self.condition = as_condition(condition) if condition is not None else _never
        self.actions = [as_action(action) for action in actions]

    def evaluate(self, facts: Facts) -> bool:
        return bool(self.condition(facts))

    def execute(self, facts: Facts) -> None:
        for action in self.actions:
            action(facts)


def _never(facts: Facts) -> bool:
    return False
