"""REST action tables.

A table maps an action key (``index``, ``read``, ...) to the verb, path
suffix, and handler method a resource emits for it. Order is
significant: it is the registration order of the resulting rules.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from wren.errors import ConfigurationError
from wren.routing.group import VERBS
from wren.routing.params import parse_pattern


@dataclass(frozen=True, slots=True)
class RestAction:
    """One REST table entry: ``RestAction("GET", "/<id>", "read")``."""

    verb: str
    suffix: str
    action: str


DEFAULT_REST: dict[str, RestAction] = {
    "index": RestAction("GET", "", "index"),
    "create": RestAction("GET", "/create", "create"),
    "save": RestAction("POST", "", "save"),
    "read": RestAction("GET", "/<id>", "read"),
    "edit": RestAction("GET", "/<id>/edit", "edit"),
    "update": RestAction("PUT", "/<id>", "update"),
    "delete": RestAction("DELETE", "/<id>", "delete"),
}


def normalize_action(key: str, entry: Any) -> RestAction:
    """Coerce a table entry into a validated ``RestAction``.

    Accepts a ``RestAction`` or any ``(verb, suffix, action)`` sequence.
    Raises ``ConfigurationError`` naming *key* when the entry is malformed.
    """
    if isinstance(entry, RestAction):
        verb, suffix, action = entry.verb, entry.suffix, entry.action
    elif isinstance(entry, Sequence) and not isinstance(entry, str) and len(entry) == 3:
        verb, suffix, action = entry
    else:
        msg = f"REST action {key!r} must be a (verb, suffix, action) triple, got {entry!r}"
        raise ConfigurationError(msg)

    if not isinstance(verb, str) or verb.upper() not in VERBS:
        msg = f"REST action {key!r} has unknown verb {verb!r}"
        raise ConfigurationError(msg)
    if not isinstance(suffix, str):
        msg = f"REST action {key!r} path suffix must be a string, got {type(suffix).__name__}"
        raise ConfigurationError(msg)
    if not isinstance(action, str) or not action:
        msg = f"REST action {key!r} needs a non-empty action name"
        raise ConfigurationError(msg)
    try:
        parse_pattern(suffix)
    except ConfigurationError as exc:
        msg = f"REST action {key!r}: {exc}"
        raise ConfigurationError(msg) from exc

    return RestAction(verb.upper(), suffix, action)


def normalize_rest(table: Mapping[str, Any]) -> dict[str, RestAction]:
    """Validate a whole table, preserving its order."""
    return {key: normalize_action(key, entry) for key, entry in table.items()}


def merge_rest(
    table: dict[str, RestAction],
    name: str | Mapping[str, Any],
    action: Any = None,
    *,
    replace: bool = False,
) -> dict[str, RestAction]:
    """Return *table* with entries added, replaced, or swapped out.

    ``merge_rest(t, "search", ("GET", "/search", "search"))`` sets one key;
    ``merge_rest(t, mapping)`` merges; ``replace=True`` discards *table*.
    """
    if isinstance(name, Mapping):
        incoming = normalize_rest(name)
        return incoming if replace else {**table, **incoming}
    return {**table, name: normalize_action(name, action)}
