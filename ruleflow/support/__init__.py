"""Declarative rules: descriptor schemas, readers and the rule factory."""

from .conditions import SpecAction, SpecCondition, parse_action, parse_condition
from .factory import RuleFactory
from .reader import (
    JsonRuleDefinitionReader,
    RuleDefinitionReader,
    YamlRuleDefinitionReader,
    reader_for,
)
from .schemas import (
    ActionOp,
    ActionSpec,
    ComparisonOp,
    ConditionGroupSpec,
    ConditionSpec,
    RuleDefinition,
)

__all__ = [
    # Schemas
    "ActionOp",
    "ActionSpec",
    "ComparisonOp",
    "ConditionGroupSpec",
    "ConditionSpec",
    "RuleDefinition",
    # Readers
    "JsonRuleDefinitionReader",
    "RuleDefinitionReader",
    "YamlRuleDefinitionReader",
    "reader_for",
    # Conditions and actions
    "SpecAction",
    "SpecCondition",
    "parse_action",
    "parse_condition",
    # Factory
    "RuleFactory",
]
