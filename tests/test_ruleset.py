"""Tests for rules and rule sets."""

import pytest

from ruleflow import DEFAULT_PRIORITY, DefaultRule, Facts, PreconditionError, Rule, RuleSet


class TestRule:
    def test_defaults(self):
        rule = Rule()
        assert rule.name == "rule"
        assert rule.description == "description"
        assert rule.priority == DEFAULT_PRIORITY
        assert rule.evaluate(Facts()) is False

    def test_equality_uses_name_description_priority(self):
        assert Rule("a", "d", 1) == Rule("a", "d", 1)
        assert Rule("a", "d", 1) != Rule("a", "other", 1)
        assert Rule("a", "d", 1) != Rule("a", "d", 2)
        assert hash(Rule("a", "d", 1)) == hash(Rule("a", "d", 1))

    def test_ordering_by_priority_then_name(self):
        rules = [Rule("b", priority=2), Rule("c", priority=1), Rule("a", priority=2)]
        assert [r.name for r in sorted(rules)] == ["c", "a", "b"]

    def test_str_is_name(self):
        assert str(Rule("adult rule")) == "adult rule"


class TestDefaultRule:
    def test_without_condition_never_triggers(self):
        rule = DefaultRule("r")
        assert rule.evaluate(Facts()) is False

    def test_callable_condition_and_actions(self):
        rule = DefaultRule(
            "r",
            condition=lambda facts: facts.get("age", 0) > 18,
            actions=[lambda facts: facts.put("adult", True), lambda facts: facts.put("done", 1)],
        )
        facts = Facts(age=30)

        assert rule.evaluate(facts) is True
        rule.execute(facts)
        assert facts.get("adult") is True
        assert facts.get("done") == 1

    def test_condition_object(self):
        class Always:
            def evaluate(self, facts):
                return True

        assert DefaultRule("r", condition=Always()).evaluate(Facts()) is True

    def test_invalid_action_rejected(self):
        with pytest.raises(TypeError):
            DefaultRule("r", actions=[42])


class TestRuleSet:
    def test_register_keeps_natural_order(self):
        rules = RuleSet(Rule("b", priority=2), Rule("a", priority=3), Rule("c", priority=1))
        assert [r.name for r in rules] == ["c", "b", "a"]

    def test_same_priority_ordered_by_name(self):
        rules = RuleSet(Rule("zeta", priority=1), Rule("alpha", priority=1))
        assert [r.name for r in rules] == ["alpha", "zeta"]

    def test_duplicate_register_is_noop(self):
        rules = RuleSet()
        rules.register(Rule("a", "d", 1))
        rules.register(Rule("a", "d", 1))
        assert len(rules) == 1

    def test_register_none_rejected(self):
        with pytest.raises(PreconditionError):
            RuleSet().register(None)

    def test_construct_from_iterable(self):
        rules = RuleSet([Rule("a"), Rule("b")])
        assert len(rules) == 2

    def test_unregister_rule(self):
        rule = Rule("a")
        rules = RuleSet(rule, Rule("b"))
        rules.unregister(rule)
        assert rule not in rules
        assert len(rules) == 1

    def test_unregister_by_name(self):
        rules = RuleSet(Rule("a"), Rule("b"))
        rules.unregister("a")
        assert [r.name for r in rules] == ["b"]

    def test_unregister_absent_is_noop(self):
        rules = RuleSet(Rule("a"))
        rules.unregister(Rule("zzz"))
        assert len(rules) == 1

    def test_find(self):
        rule = Rule("a")
        rules = RuleSet(rule)
        assert rules.find("a") is rule
        assert rules.find("missing") is None

    def test_clear_and_is_empty(self):
        rules = RuleSet(Rule("a"))
        assert not rules.is_empty()
        rules.clear()
        assert rules.is_empty()

    def test_iteration_over_snapshot(self):
        rules = RuleSet(Rule("a"), Rule("b"))
        for rule in rules:
            rules.unregister(rule)
        assert rules.is_empty()
