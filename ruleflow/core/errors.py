"""Exception hierarchy for the rules engine."""

from __future__ import annotations


class RuleflowError(Exception):
    """Base exception for ruleflow."""


class PreconditionError(RuleflowError, ValueError):
    """A required argument was missing (e.g. ``None`` rules or facts)."""


class NoSuchFactError(RuleflowError, KeyError):
    """A rule referred to a fact that is not present in the fact store."""

    def __init__(self, fact_name: str, message: str | None = None):
        self.fact_name = fact_name
        self.message = message or f"No fact named '{fact_name}' found in known facts"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class CompositeRuleError(RuleflowError, ValueError):
    """A composite rule could not be constructed."""


class RuleDefinitionError(RuleflowError, ValueError):
    """A rule descriptor is invalid."""


def require_not_none(value, message: str):
    """Return ``value`` or raise PreconditionError when it is None."""
    if value is None:
        raise PreconditionError(message)
    return value
