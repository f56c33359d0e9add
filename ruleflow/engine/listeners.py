"""Listener hooks invoked synchronously by the engines.

Subclass and override only the hooks you need; every default is a no-op
(and ``RuleListener.before_evaluate`` allows evaluation).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ruleflow.core.facts import Facts

if TYPE_CHECKING:
    from ruleflow.rules import Rule, RuleSet


class RuleListener:
    """Per-rule hooks."""

    def before_evaluate(self, rule: Rule, facts: Facts) -> bool:
        """Return False to skip the rule without evaluating its condition."""
        return True

    def after_evaluate(self, rule: Rule, facts: Facts, evaluation_result: bool) -> None:
        pass

    def on_evaluation_error(self, rule: Rule, facts: Facts, exception: Exception) -> None:
        pass

    def before_execute(self, rule: Rule, facts: Facts) -> None:
        pass

    def on_success(self, rule: Rule, facts: Facts) -> None:
        pass

    def on_failure(self, rule: Rule, facts: Facts, exception: Exception) -> None:
        pass


class EngineListener:
    """Per-session hooks, each called once per ``fire``/``check``."""

    def before_evaluate(self, rules: RuleSet, facts: Facts) -> None:
        pass

    def after_execute(self, rules: RuleSet, facts: Facts) -> None:
        pass
