"""Pydantic models for declarative rule descriptors."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from ruleflow.core.config import DEFAULT_PRIORITY
from ruleflow.rules.base import DEFAULT_DESCRIPTION, DEFAULT_NAME


# =============================================================================
# Condition Expressions
# =============================================================================


class ComparisonOp(str, Enum):
    """Comparison operators for conditions."""

    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    IN = "in"
    NOT_IN = "not_in"
    EXISTS = "exists"


class ConditionSpec(BaseModel):
    """A single condition specification."""

    field: str = Field(..., description="Fact name, dotted for nested values (e.g. 'person.age')")
    operator: ComparisonOp = Field(ComparisonOp.EQ, description="Comparison operator")
    value: Any = Field(None, description="Expected value")


class ConditionGroupSpec(BaseModel):
    """Grouped conditions with logical operators."""

    model_config = ConfigDict(extra="forbid")

    all: list[ConditionSpec | ConditionGroupSpec] | None = Field(
        None, description="All conditions must be true (AND)"
    )
    any: list[ConditionSpec | ConditionGroupSpec] | None = Field(
        None, description="Any condition must be true (OR)"
    )

    @model_validator(mode="after")
    def _require_conditions(self) -> ConditionGroupSpec:
        if not self.all and not self.any:
            raise ValueError("A condition group needs a non-empty 'all' or 'any' list")
        return self


# =============================================================================
# Actions
# =============================================================================


class ActionOp(str, Enum):
    """Operations an action can apply to a fact."""

    SET = "set"
    REMOVE = "remove"
    INCREMENT = "increment"
    APPEND = "append"


class ActionSpec(BaseModel):
    """A single action specification."""

    op: ActionOp = Field(ActionOp.SET, description="Operation to apply")
    fact: str = Field(..., description="Target fact, dotted for nested values")
    value: Any = Field(None, description="Operand (new value, increment or appended item)")


# =============================================================================
# Rule Definition
# =============================================================================


class RuleDefinition(BaseModel):
    """A rule as declared in a YAML or JSON descriptor.

    Plain rules need a condition and at least one action. Composite rules
    declare ``composite_rule_type`` and nested ``composing_rules`` instead.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = DEFAULT_NAME
    description: str = DEFAULT_DESCRIPTION
    priority: int = DEFAULT_PRIORITY

    condition: str | ConditionSpec | ConditionGroupSpec | None = None
    actions: list[str | ActionSpec] = Field(default_factory=list)

    composite_rule_type: str | None = Field(
        None, validation_alias=AliasChoices("composite_rule_type", "compositeRuleType")
    )
    composing_rules: list[RuleDefinition] = Field(
        default_factory=list, validation_alias=AliasChoices("composing_rules", "composingRules")
    )

    @model_validator(mode="after")
    def _require_condition_and_actions(self) -> RuleDefinition:
        if self.is_composite():
            return self
        if self.condition is None or (isinstance(self.condition, str) and not self.condition.strip()):
            raise ValueError("The rule condition must be specified")
        if not self.actions:
            raise ValueError("The rule action(s) must be specified")
        return self

    def is_composite(self) -> bool:
        return self.composite_rule_type is not None


# Enable forward references
ConditionGroupSpec.model_rebuild()
RuleDefinition.model_rebuild()
