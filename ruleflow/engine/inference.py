"""Forward-chaining engine firing rules until a fixpoint is reached."""

from __future__ import annotations

import logging

from ruleflow.core.errors import require_not_none
from ruleflow.core.facts import Facts
from ruleflow.rules import RuleSet

from .firing import FiringEngine

logger = logging.getLogger(__name__)


class InferenceEngine(FiringEngine):
    """Repeatedly fires the rules whose conditions currently hold.

    Each cycle selects the candidate rules against the current facts and
    fires them with single-pass semantics. The session ends when no rule is
    a candidate. There is no cycle limit: rule actions must eventually make
    the conditions false (typically by removing or changing facts).
    """

    def fire(self, rules: RuleSet, facts: Facts) -> None:
        require_not_none(rules, "Rules must not be None")
        require_not_none(facts, "Facts must not be None")
        self._before_session(rules, facts)

        cycle = 0
        while True:
            cycle += 1
            logger.debug("Selecting candidate rules based on the following facts: %s", facts)
            candidates = self._select_candidates(rules, facts)
            if candidates.is_empty():
                logger.debug("No candidate rules found for cycle %d, fixpoint reached", cycle)
                break
            logger.debug("Cycle %d: firing %d candidate rule(s)", cycle, len(candidates))
            self._do_fire(candidates, facts)

        self._after_session(rules, facts)

    def _select_candidates(self, rules: RuleSet, facts: Facts) -> RuleSet:
        candidates = RuleSet()
        for rule in rules:
            try:
                triggered = rule.evaluate(facts)
            except Exception:
                logger.debug("Rule '%s' evaluated with error during candidate selection", rule.name, exc_info=True)
                continue
            if triggered:
                candidates.register(rule)
        return candidates
