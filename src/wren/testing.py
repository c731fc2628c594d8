"""Assertion helpers for tests of compiled rule tables.

Each assertion produces a clear error message on failure::

    from wren.testing import assert_rule_table, rule_triples
"""

from collections.abc import Iterable

from wren.routing.group import RuleGroup
from wren.routing.rule import RuleNode


def rule_triples(source: RuleGroup | Iterable[RuleNode]) -> list[tuple[str, str, str]]:
    """Ordered (verb, full path, target) triples for a group or rule list."""
    rules = source.rules() if isinstance(source, RuleGroup) else source
    return [node.as_triple() for node in rules]


def assert_rule_table(
    source: RuleGroup | Iterable[RuleNode],
    expected: list[tuple[str, str, str]],
) -> None:
    """Assert the rules match *expected* exactly, in order."""
    actual = rule_triples(source)
    assert actual == expected, (
        "Rule table mismatch.\n"
        f"Expected: {expected}\n"
        f"Actual:   {actual}"
    )


def assert_has_rule(source: RuleGroup | Iterable[RuleNode], verb: str, path: str) -> RuleNode:
    """Assert exactly one rule matches *verb* and full *path*, and return it."""
    rules = source.rules() if isinstance(source, RuleGroup) else source
    matches = [n for n in rules if n.verb == verb.upper() and n.full_path == path]
    assert len(matches) == 1, (
        f"Expected one {verb.upper()} {path!r} rule, found {len(matches)}"
    )
    return matches[0]
