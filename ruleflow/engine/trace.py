"""
Session tracing for firing engines.

Provides a listener recording every rule-level event of a session, enabling:
- Audit trails of which rules fired and in which order
- Debugging of vetoes, evaluation errors and action failures
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from ruleflow.core.facts import Facts

from .listeners import EngineListener, RuleListener

if TYPE_CHECKING:
    from ruleflow.rules import Rule, RuleSet

    from .firing import AbstractEngine


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TraceEvent(str, Enum):
    """Rule-level events, named after the listener hooks."""

    BEFORE_EVALUATE = "before_evaluate"
    AFTER_EVALUATE = "after_evaluate"
    EVALUATION_ERROR = "evaluation_error"
    BEFORE_EXECUTE = "before_execute"
    SUCCESS = "success"
    FAILURE = "failure"


class TraceStep(BaseModel):
    """A single rule event in the session trace."""

    rule: str
    """Name of the rule the event is about."""

    priority: int
    """Priority of the rule when the event happened."""

    event: TraceEvent
    """Which listener hook produced the step."""

    result: bool | None = None
    """Evaluation result for AFTER_EVALUATE steps."""

    error: str | None = None
    """Error description for EVALUATION_ERROR and FAILURE steps."""


class SessionTrace(BaseModel):
    """Complete trace of one ``fire`` or ``check`` call."""

    started_at: str = Field(default_factory=_now)
    """ISO timestamp of when the session started."""

    completed_at: str | None = None
    """ISO timestamp of when the session completed."""

    rule_count: int = 0
    """Number of rules handed to the engine."""

    steps: list[TraceStep] = Field(default_factory=list)
    """Steps in dispatch order."""

    def add_step(self, rule: Rule, event: TraceEvent, result: bool | None = None,
                 error: Exception | None = None) -> TraceStep:
        step = TraceStep(
            rule=rule.name,
            priority=rule.priority,
            event=event,
            result=result,
            error=f"{type(error).__name__}: {error}" if error is not None else None,
        )
        self.steps.append(step)
        return step

    def complete(self) -> None:
        """Mark the trace as complete."""
        self.completed_at = _now()

    def fired_rules(self) -> list[str]:
        """Names of rules whose actions completed successfully, in order."""
        return [step.rule for step in self.steps if step.event == TraceEvent.SUCCESS]

    def failed_rules(self) -> list[str]:
        return [step.rule for step in self.steps if step.event == TraceEvent.FAILURE]


class _SessionHooks(EngineListener):
    """Engine-level half of a FiringTrace."""

    def __init__(self, trace: FiringTrace):
        self._trace = trace

    def before_evaluate(self, rules: RuleSet, facts: Facts) -> None:
        self._trace.sessions.append(SessionTrace(rule_count=len(rules)))

    def after_execute(self, rules: RuleSet, facts: Facts) -> None:
        self._trace.current().complete()


class FiringTrace(RuleListener):
    """Listener recording one SessionTrace per session.

    Use ``attach`` to register it with an engine; the rule hooks record the
    steps and ``session_listener`` opens and closes sessions. It never vetoes
    a rule.
    """

    def __init__(self):
        self.sessions: list[SessionTrace] = []
        self.session_listener = _SessionHooks(self)

    def attach(self, engine: AbstractEngine) -> FiringTrace:
        engine.register_rule_listener(self)
        engine.register_engine_listener(self.session_listener)
        return self

    @property
    def last(self) -> SessionTrace | None:
        return self.sessions[-1] if self.sessions else None

    def current(self) -> SessionTrace:
        # Rule events without an open session start a new one
        if not self.sessions or self.sessions[-1].completed_at is not None:
            self.sessions.append(SessionTrace())
        return self.sessions[-1]

    def before_evaluate(self, rule: Rule, facts: Facts) -> bool:
        self.current().add_step(rule, TraceEvent.BEFORE_EVALUATE)
        return True

    def after_evaluate(self, rule: Rule, facts: Facts, evaluation_result: bool) -> None:
        self.current().add_step(rule, TraceEvent.AFTER_EVALUATE, result=evaluation_result)

    def on_evaluation_error(self, rule: Rule, facts: Facts, exception: Exception) -> None:
        self.current().add_step(rule, TraceEvent.EVALUATION_ERROR, error=exception)

    def before_execute(self, rule: Rule, facts: Facts) -> None:
        self.current().add_step(rule, TraceEvent.BEFORE_EXECUTE)

    def on_success(self, rule: Rule, facts: Facts) -> None:
        self.current().add_step(rule, TraceEvent.SUCCESS)

    def on_failure(self, rule: Rule, facts: Facts, exception: Exception) -> None:
        self.current().add_step(rule, TraceEvent.FAILURE, error=exception)
