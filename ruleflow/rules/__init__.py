"""Rules: the rule contract, rule sets, composite groups and the builder."""

from .base import (
    DEFAULT_DESCRIPTION,
    DEFAULT_NAME,
    Action,
    Condition,
    DefaultRule,
    Rule,
)
from .builder import BoundAction, BoundCondition, RuleBuilder
from .composite import CompositeKind, CompositeRule
from .ruleset import RuleSet

__all__ = [
    # Base
    "DEFAULT_DESCRIPTION",
    "DEFAULT_NAME",
    "Action",
    "Condition",
    "DefaultRule",
    "Rule",
    # Builder
    "BoundAction",
    "BoundCondition",
    "RuleBuilder",
    # Composite
    "CompositeKind",
    "CompositeRule",
    # Rule set
    "RuleSet",
]
