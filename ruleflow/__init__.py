"""
ruleflow - a forward-chaining production rules engine.

Rules pair a condition over named facts with ordered actions. Engines fire
rule sets once (FiringEngine) or repeatedly until no rule applies
(InferenceEngine). Rules can be written in Python, assembled with
RuleBuilder, or declared in YAML/JSON descriptors loaded by RuleFactory.
"""

from .core import (
    DEFAULT_PRIORITY,
    CompositeRuleError,
    Fact,
    Facts,
    NoSuchFactError,
    PreconditionError,
    RuleDefinitionError,
    RuleflowError,
    Settings,
    configure_logging,
    get_settings,
)
from .engine import (
    AbstractEngine,
    EngineListener,
    EngineParameters,
    FiringEngine,
    FiringTrace,
    InferenceEngine,
    RuleListener,
)
from .rules import CompositeKind, CompositeRule, DefaultRule, Rule, RuleBuilder, RuleSet
from .support import JsonRuleDefinitionReader, RuleFactory, YamlRuleDefinitionReader

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PRIORITY",
    "AbstractEngine",
    "CompositeKind",
    "CompositeRule",
    "CompositeRuleError",
    "DefaultRule",
    "EngineListener",
    "EngineParameters",
    "Fact",
    "Facts",
    "FiringEngine",
    "FiringTrace",
    "InferenceEngine",
    "JsonRuleDefinitionReader",
    "NoSuchFactError",
    "PreconditionError",
    "Rule",
    "RuleBuilder",
    "RuleDefinitionError",
    "RuleFactory",
    "RuleListener",
    "RuleSet",
    "RuleflowError",
    "Settings",
    "YamlRuleDefinitionReader",
    "configure_logging",
    "get_settings",
]
