"""Core types: facts, errors and configuration."""

from .config import DEFAULT_PRIORITY, Settings, configure_logging, get_settings
from .errors import (
    CompositeRuleError,
    NoSuchFactError,
    PreconditionError,
    RuleDefinitionError,
    RuleflowError,
)
from .facts import Fact, Facts

__all__ = [
    # Config
    "DEFAULT_PRIORITY",
    "Settings",
    "configure_logging",
    "get_settings",
    # Errors
    "CompositeRuleError",
    "NoSuchFactError",
    "PreconditionError",
    "RuleDefinitionError",
    "RuleflowError",
    # Facts
    "Fact",
    "Facts",
]
