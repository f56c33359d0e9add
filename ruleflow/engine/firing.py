"""Single-pass firing engine."""

from __future__ import annotations

import logging

from ruleflow.core.errors import require_not_none
from ruleflow.core.facts import Facts
from ruleflow.rules import Rule, RuleSet

from .listeners import EngineListener, RuleListener
from .parameters import EngineParameters

logger = logging.getLogger(__name__)


class AbstractEngine:
    """Parameters and listener registration shared by the engines."""

    def __init__(self, parameters: EngineParameters | None = None):
        self._parameters = (parameters or EngineParameters()).model_copy()
        self._rule_listeners: list[RuleListener] = []
        self._engine_listeners: list[EngineListener] = []

    @property
    def parameters(self) -> EngineParameters:
        """A copy of the engine parameters."""
        return self._parameters.model_copy()

    @property
    def rule_listeners(self) -> tuple[RuleListener, ...]:
        return tuple(self._rule_listeners)

    @property
    def engine_listeners(self) -> tuple[EngineListener, ...]:
        return tuple(self._engine_listeners)

    def register_rule_listener(self, *listeners: RuleListener) -> None:
        for listener in listeners:
            self._rule_listeners.append(require_not_none(listener, "Listener must not be None"))

    def register_engine_listener(self, *listeners: EngineListener) -> None:
        for listener in listeners:
            self._engine_listeners.append(require_not_none(listener, "Listener must not be None"))

    def fire(self, rules: RuleSet, facts: Facts) -> None:
        raise NotImplementedError

    def check(self, rules: RuleSet, facts: Facts) -> dict[Rule, bool]:
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Listener dispatch
    # -------------------------------------------------------------------------

    def _before_session(self, rules: RuleSet, facts: Facts) -> None:
        for listener in self._engine_listeners:
            listener.before_evaluate(rules, facts)

    def _after_session(self, rules: RuleSet, facts: Facts) -> None:
        for listener in self._engine_listeners:
            listener.after_execute(rules, facts)

    def _should_be_evaluated(self, rule: Rule, facts: Facts) -> bool:
        return all(listener.before_evaluate(rule, facts) for listener in self._rule_listeners)

    def _after_evaluate(self, rule: Rule, facts: Facts, result: bool) -> None:
        for listener in self._rule_listeners:
            listener.after_evaluate(rule, facts, result)

    def _on_evaluation_error(self, rule: Rule, facts: Facts, exception: Exception) -> None:
        for listener in self._rule_listeners:
            listener.on_evaluation_error(rule, facts, exception)

    def _before_execute(self, rule: Rule, facts: Facts) -> None:
        for listener in self._rule_listeners:
            listener.before_execute(rule, facts)

    def _on_success(self, rule: Rule, facts: Facts) -> None:
        for listener in self._rule_listeners:
            listener.on_success(rule, facts)

    def _on_failure(self, rule: Rule, facts: Facts, exception: Exception) -> None:
        for listener in self._rule_listeners:
            listener.on_failure(rule, facts, exception)


class FiringEngine(AbstractEngine):
    """Fires rules once, in natural order.

    For each rule: stop at the priority threshold, skip it if a rule
    listener vetoes it, evaluate its condition and execute its actions when
    triggered. Evaluation and execution errors are reported to rule
    listeners and never raised; the skip parameters decide whether the
    session goes on after an applied, failed or non-triggered rule.
    """

    def fire(self, rules: RuleSet, facts: Facts) -> None:
        require_not_none(rules, "Rules must not be None")
        require_not_none(facts, "Facts must not be None")
        self._before_session(rules, facts)
        self._do_fire(rules, facts)
        self._after_session(rules, facts)

    def check(self, rules: RuleSet, facts: Facts) -> dict[Rule, bool]:
        """Evaluate rules without executing them.

        Returns:
            Evaluation result per rule, in natural order. Rules vetoed by a
            listener are left out; rules whose condition raised map to False.
        """
        require_not_none(rules, "Rules must not be None")
        require_not_none(facts, "Facts must not be None")
        self._before_session(rules, facts)
        result = self._do_check(rules, facts)
        self._after_session(rules, facts)
        return result

    def _do_fire(self, rules: RuleSet, facts: Facts) -> None:
        if rules.is_empty():
            logger.warning("No rules registered! Nothing to apply")
            return

        parameters = self._parameters.model_copy()
        self._log_session(parameters, rules, facts)
        logger.debug("Rules evaluation started")

        for rule in rules:
            name = rule.name
            priority = rule.priority
            if priority > parameters.priority_threshold:
                logger.debug(
                    "Rule priority threshold (%s) exceeded at rule '%s' with priority=%s, "
                    "next rules will be skipped",
                    parameters.priority_threshold, name, priority,
                )
                break

            if not self._should_be_evaluated(rule, facts):
                logger.debug("Rule '%s' has been skipped before being evaluated", name)
                continue

            try:
                triggered = bool(rule.evaluate(facts))
            except Exception as e:
                logger.error("Rule '%s' evaluated with error", name, exc_info=True)
                self._on_evaluation_error(rule, facts, e)
                if parameters.skip_on_first_non_triggered_rule:
                    logger.debug(
                        "Next rules will be skipped since parameter "
                        "skip_on_first_non_triggered_rule is set"
                    )
                    break
                continue

            if triggered:
                logger.debug("Rule '%s' triggered", name)
                self._after_evaluate(rule, facts, True)
                if not self._execute(rule, facts, parameters):
                    break
            else:
                logger.debug("Rule '%s' has been evaluated to false, it has not been executed", name)
                self._after_evaluate(rule, facts, False)
                if parameters.skip_on_first_non_triggered_rule:
                    logger.debug(
                        "Next rules will be skipped since parameter "
                        "skip_on_first_non_triggered_rule is set"
                    )
                    break

    def _execute(self, rule: Rule, facts: Facts, parameters: EngineParameters) -> bool:
        """Execute a triggered rule. Returns False when the session must stop."""
        self._before_execute(rule, facts)
        try:
            rule.execute(facts)
        except Exception as e:
            logger.error("Rule '%s' performed with error", rule.name, exc_info=True)
            self._on_failure(rule, facts, e)
            if parameters.skip_on_first_failed_rule:
                logger.debug(
                    "Next rules will be skipped since parameter skip_on_first_failed_rule is set"
                )
                return False
            return True

        logger.debug("Rule '%s' performed successfully", rule.name)
        self._on_success(rule, facts)
        if parameters.skip_on_first_applied_rule:
            logger.debug(
                "Next rules will be skipped since parameter skip_on_first_applied_rule is set"
            )
            return False
        return True

    def _do_check(self, rules: RuleSet, facts: Facts) -> dict[Rule, bool]:
        logger.debug("Checking rules")
        result: dict[Rule, bool] = {}
        for rule in rules:
            if not self._should_be_evaluated(rule, facts):
                continue
            try:
                result[rule] = bool(rule.evaluate(facts))
            except Exception as e:
                logger.error("Rule '%s' evaluated with error", rule.name, exc_info=True)
                self._on_evaluation_error(rule, facts, e)
                result[rule] = False
        return result

    def _log_session(self, parameters: EngineParameters, rules: RuleSet, facts: Facts) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug("%s", parameters)
        logger.debug("Registered rules:")
        for rule in rules:
            logger.debug(
                "Rule { name = '%s', description = '%s', priority = '%s'}",
                rule.name, rule.description, rule.priority,
            )
        logger.debug("Known facts:")
        for fact in facts:
            logger.debug("%s", fact)
