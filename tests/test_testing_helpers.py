"""Tests for wren.testing — rule table assertion helpers."""

import pytest

from wren.routing.group import RuleGroup
from wren.testing import assert_has_rule, assert_rule_table, rule_triples


def _group() -> RuleGroup:
    root = RuleGroup()
    root.add_rule("a", "t/a", "GET")
    root.group("g").add_rule("b", "t/b", "POST")
    return root


class TestRuleTriples:
    def test_from_group(self) -> None:
        root = _group()
        assert rule_triples(root) == [("GET", "a", "t/a"), ("POST", "g/b", "t/b")]

    def test_from_iterable(self) -> None:
        root = _group()
        assert rule_triples(list(root.rules())[:1]) == [("GET", "a", "t/a")]


class TestAssertions:
    def test_rule_table_passes(self) -> None:
        root = _group()
        assert_rule_table(root, [("GET", "a", "t/a"), ("POST", "g/b", "t/b")])

    def test_rule_table_order_matters(self) -> None:
        root = _group()
        with pytest.raises(AssertionError, match="Rule table mismatch"):
            assert_rule_table(root, [("POST", "g/b", "t/b"), ("GET", "a", "t/a")])

    def test_has_rule(self) -> None:
        root = _group()
        assert assert_has_rule(root, "post", "g/b").target == "t/b"

    def test_has_rule_missing(self) -> None:
        root = _group()
        with pytest.raises(AssertionError, match="found 0"):
            assert_has_rule(root, "GET", "g/b")
