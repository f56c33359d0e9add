"""Tests for the fact store."""

import pytest

from ruleflow import Fact, Facts, NoSuchFactError, PreconditionError


class TestFacts:
    def test_put_and_get(self):
        facts = Facts()
        facts.put("foo", 1)
        facts.put("bar", 2)

        assert facts.get("foo") == 1
        assert facts.get("bar") == 2
        assert len(facts) == 2

    def test_put_replaces_existing_fact(self):
        facts = Facts()
        facts.put("foo", 1)
        facts.put("foo", 2)

        assert len(facts) == 1
        assert facts.get("foo") == 2

    def test_put_none_name_rejected(self):
        with pytest.raises(PreconditionError):
            Facts().put(None, 1)

    def test_none_value_is_present(self):
        facts = Facts(foo=None)

        assert "foo" in facts
        assert facts.require("foo") is None
        assert "bar" not in facts

    def test_add_fact(self):
        facts = Facts()
        facts.add(Fact("foo", 1))
        assert facts.get_fact("foo") == Fact("foo", 1)

    def test_remove(self):
        facts = Facts(foo=1)
        facts.remove("foo")
        assert "foo" not in facts
        assert len(facts) == 0

    def test_remove_absent_is_noop(self):
        facts = Facts(foo=1)
        facts.remove("bar")
        assert len(facts) == 1

    def test_get_default(self):
        assert Facts().get("missing") is None
        assert Facts().get("missing", 42) == 42

    def test_require_missing_raises(self):
        with pytest.raises(NoSuchFactError) as exc_info:
            Facts(foo=1).require("bar")
        assert exc_info.value.fact_name == "bar"
        assert isinstance(exc_info.value, KeyError)

    def test_initial_mapping_and_kwargs(self):
        facts = Facts({"a": 1, "b": 2}, b=3)
        assert facts.as_dict() == {"a": 1, "b": 3}

    def test_as_dict_is_a_copy(self):
        facts = Facts(foo=1)
        snapshot = facts.as_dict()
        snapshot["bar"] = 2
        assert "bar" not in facts

    def test_iteration_yields_facts(self):
        facts = Facts(foo=1, bar=2)
        assert {fact.name: fact.value for fact in facts} == {"foo": 1, "bar": 2}

    def test_clear(self):
        facts = Facts(foo=1, bar=2)
        facts.clear()
        assert len(facts) == 0

    def test_str(self):
        facts = Facts(foo=1)
        assert str(facts) == "[Fact{name='foo', value=1}]"
