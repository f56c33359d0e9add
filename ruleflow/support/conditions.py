"""Descriptor-backed conditions and actions.

Conditions compare a fact (or a nested value reached through a dotted path)
with an expected value. A condition on an absent fact raises
NoSuchFactError, and comparing values of incompatible types raises
TypeError; the firing engine reports both as evaluation errors. Only the
``exists`` operator tolerates absent facts.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from ruleflow.core.errors import NoSuchFactError, RuleDefinitionError
from ruleflow.core.facts import Facts

from .schemas import ActionOp, ActionSpec, ComparisonOp, ConditionGroupSpec, ConditionSpec


# Operator implementations
def _eval_in(actual: Any, expected: Any) -> bool:
    if isinstance(expected, (list, tuple, set, frozenset)):
        return actual in expected
    return False


def _eval_not_in(actual: Any, expected: Any) -> bool:
    if isinstance(expected, (list, tuple, set, frozenset)):
        return actual not in expected
    return True


OPERATORS = {
    ComparisonOp.EQ: lambda actual, expected: actual == expected,
    ComparisonOp.NE: lambda actual, expected: actual != expected,
    ComparisonOp.IN: _eval_in,
    ComparisonOp.NOT_IN: _eval_not_in,
    ComparisonOp.GT: lambda actual, expected: actual > expected,
    ComparisonOp.LT: lambda actual, expected: actual < expected,
    ComparisonOp.GE: lambda actual, expected: actual >= expected,
    ComparisonOp.LE: lambda actual, expected: actual <= expected,
}


# =============================================================================
# Fact paths
# =============================================================================


def resolve(facts: Facts, path: str) -> Any:
    """Resolve a dotted path such as ``person.age`` against facts."""
    head, *rest = path.split(".")
    value = facts.require(head)
    for part in rest:
        value = _child(value, part, path)
    return value


def _child(value: Any, part: str, path: str) -> Any:
    if isinstance(value, Mapping):
        if part not in value:
            raise NoSuchFactError(path, f"No value '{part}' found for fact path '{path}'")
        return value[part]
    try:
        return getattr(value, part)
    except AttributeError:
        raise NoSuchFactError(path, f"No value '{part}' found for fact path '{path}'") from None


def assign(facts: Facts, path: str, value: Any) -> None:
    head, *rest = path.split(".")
    if not rest:
        facts.put(head, value)
        return
    parent = resolve(facts, ".".join([head, *rest[:-1]]))
    if isinstance(parent, MutableMapping):
        parent[rest[-1]] = value
    else:
        setattr(parent, rest[-1], value)


def discard(facts: Facts, path: str) -> None:
    head, *rest = path.split(".")
    if not rest:
        facts.remove(head)
        return
    parent = resolve(facts, ".".join([head, *rest[:-1]]))
    if isinstance(parent, MutableMapping):
        parent.pop(rest[-1], None)
    elif hasattr(parent, rest[-1]):
        delattr(parent, rest[-1])


# =============================================================================
# String parsing
# =============================================================================


def parse_value(value_str: str) -> Any:
    """Parse a string value into appropriate type."""
    value_str = value_str.strip()

    # Boolean / null
    if value_str.lower() == "true":
        return True
    if value_str.lower() == "false":
        return False
    if value_str.lower() in ("null", "none"):
        return None

    # List
    if value_str.startswith("[") and value_str.endswith("]"):
        inner = value_str[1:-1].strip()
        if not inner:
            return []
        return [parse_value(item) for item in inner.split(",")]

    # Number
    try:
        if "." in value_str:
            return float(value_str)
        return int(value_str)
    except ValueError:
        pass

    # String (remove quotes if present)
    return value_str.strip("'\"")


def parse_condition(cond_str: str) -> ConditionSpec:
    """Parse a string condition like 'age > 18' or 'rain == true'."""
    operators = [
        ("==", ComparisonOp.EQ),
        ("!=", ComparisonOp.NE),
        (">=", ComparisonOp.GE),
        ("<=", ComparisonOp.LE),
        (">", ComparisonOp.GT),
        ("<", ComparisonOp.LT),
        (" not in ", ComparisonOp.NOT_IN),
        (" in ", ComparisonOp.IN),
    ]
    for token, op in operators:
        if token in cond_str:
            parts = cond_str.split(token)
            if len(parts) == 2:
                return ConditionSpec(field=parts[0].strip(), operator=op, value=parse_value(parts[1]))

    # Default: treat as existence check ("rain", "rain exists" or "rain not exists")
    field = cond_str.strip()
    present = True
    if field.endswith(" not exists"):
        field, present = field[: -len(" not exists")], False
    elif field.endswith(" exists"):
        field = field[: -len(" exists")]
    return ConditionSpec(field=field.strip(), operator=ComparisonOp.EXISTS, value=present)


def parse_action(action_str: str) -> ActionSpec:
    """Parse a string action like 'adult = true', 'count += 1' or 'remove foo'."""
    text = action_str.strip().rstrip(";").strip()
    keyword, _, target = text.partition(" ")
    if keyword in ("remove", "del") and target.strip() and "=" not in target:
        return ActionSpec(op=ActionOp.REMOVE, fact=target.strip())
    if "+=" in text:
        fact, _, value = text.partition("+=")
        return ActionSpec(op=ActionOp.INCREMENT, fact=fact.strip(), value=parse_value(value))
    if "-=" in text:
        fact, _, value = text.partition("-=")
        return ActionSpec(op=ActionOp.INCREMENT, fact=fact.strip(), value=-parse_value(value))
    if "=" in text and "==" not in text:
        fact, _, value = text.partition("=")
        return ActionSpec(op=ActionOp.SET, fact=fact.strip(), value=parse_value(value))
    raise RuleDefinitionError(f"Unable to parse action: '{action_str}'")


# =============================================================================
# Condition / Action implementations
# =============================================================================


class SpecCondition:
    """Condition evaluating a ConditionSpec or an all/any group."""

    def __init__(self, spec: str | ConditionSpec | ConditionGroupSpec):
        if isinstance(spec, str):
            spec = parse_condition(spec)
        self.spec = spec

    def evaluate(self, facts: Facts) -> bool:
        return self._evaluate(self.spec, facts)

    def _evaluate(self, spec: ConditionSpec | ConditionGroupSpec, facts: Facts) -> bool:
        if isinstance(spec, ConditionGroupSpec):
            if not spec.all and not spec.any:
                raise RuleDefinitionError("A condition group needs a non-empty 'all' or 'any' list")
            if spec.all and not all(self._evaluate(item, facts) for item in spec.all):
                return False
            return not spec.any or any(self._evaluate(item, facts) for item in spec.any)

        if spec.operator == ComparisonOp.EXISTS:
            # Presence only: a fact holding None exists
            try:
                resolve(facts, spec.field)
                present = True
            except NoSuchFactError:
                present = False
            return not present if spec.value is False else present

        actual = resolve(facts, spec.field)
        return bool(OPERATORS[spec.operator](actual, spec.value))

    def __repr__(self) -> str:
        return f"SpecCondition({self.spec!r})"


class SpecAction:
    """Action applying an ActionSpec to facts."""

    def __init__(self, spec: str | ActionSpec):
        if isinstance(spec, str):
            spec = parse_action(spec)
        self.spec = spec

    def execute(self, facts: Facts) -> None:
        spec = self.spec
        if spec.op == ActionOp.SET:
            assign(facts, spec.fact, spec.value)
        elif spec.op == ActionOp.REMOVE:
            discard(facts, spec.fact)
        elif spec.op == ActionOp.INCREMENT:
            step = 1 if spec.value is None else spec.value
            assign(facts, spec.fact, resolve(facts, spec.fact) + step)
        elif spec.op == ActionOp.APPEND:
            resolve(facts, spec.fact).append(spec.value)

    def __repr__(self) -> str:
        return f"SpecAction({self.spec!r})"
