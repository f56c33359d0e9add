"""Pytest fixtures for test suite."""

import pytest
from pathlib import Path

from ruleflow import Facts, FiringEngine, InferenceEngine, Rule, RuleListener, RuleSet, EngineListener


# =============================================================================
# Test Rules
# =============================================================================


class StubRule(Rule):
    """Rule with a fixed evaluation outcome that records its execution."""

    def __init__(self, name: str, priority: int = 1, triggered: bool = True,
                 evaluate_error: Exception | None = None, execute_error: Exception | None = None,
                 log: list | None = None):
        super().__init__(name=name, description=f"{name} description", priority=priority)
        self.triggered = triggered
        self.evaluate_error = evaluate_error
        self.execute_error = execute_error
        self.log = log if log is not None else []
        self.evaluated = 0
        self.executed = 0

    def evaluate(self, facts: Facts) -> bool:
        self.evaluated += 1
        if self.evaluate_error is not None:
            raise self.evaluate_error
        return self.triggered

    def execute(self, facts: Facts) -> None:
        self.executed += 1
        self.log.append(self.name)
        if self.execute_error is not None:
            raise self.execute_error


class RecordingListener(RuleListener, EngineListener):
    """Listener recording every hook call as (hook, name) tuples."""

    def __init__(self, veto: set[str] | None = None):
        self.calls: list[tuple] = []
        self.veto = veto or set()

    def before_evaluate(self, rule_or_rules, facts):
        if isinstance(rule_or_rules, RuleSet):
            self.calls.append(("before_session", len(rule_or_rules)))
            return None
        self.calls.append(("before_evaluate", rule_or_rules.name))
        return rule_or_rules.name not in self.veto

    def after_evaluate(self, rule, facts, evaluation_result):
        self.calls.append(("after_evaluate", rule.name, evaluation_result))

    def on_evaluation_error(self, rule, facts, exception):
        self.calls.append(("on_evaluation_error", rule.name, exception))

    def before_execute(self, rule, facts):
        self.calls.append(("before_execute", rule.name))

    def on_success(self, rule, facts):
        self.calls.append(("on_success", rule.name))

    def on_failure(self, rule, facts, exception):
        self.calls.append(("on_failure", rule.name, exception))

    def after_execute(self, rules, facts):
        self.calls.append(("after_session", len(rules)))

    def hooks(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture
def data_dir() -> Path:
    """Path to the rule descriptor fixtures."""
    return Path(__file__).parent / "data"


@pytest.fixture
def facts() -> Facts:
    return Facts(age=30, rain=True)


@pytest.fixture
def execution_log() -> list:
    """Shared list recording rule executions in order."""
    return []


@pytest.fixture
def engine() -> FiringEngine:
    return FiringEngine()


@pytest.fixture
def inference_engine() -> InferenceEngine:
    return InferenceEngine()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def make_rule(execution_log):
    """Factory for StubRules sharing the execution log."""
    def _make(name: str, priority: int = 1, **kwargs) -> StubRule:
        kwargs.setdefault("log", execution_log)
        return StubRule(name, priority, **kwargs)
    return _make
