"""Rule tree resolution for ``wren routes``.

A routes module exposes either a ``Router`` or a bare ``RuleGroup``
root; both are reduced to the ordered rules they compile to.
"""

import importlib

from wren.routing.group import RuleGroup
from wren.routing.router import Router, build_pending
from wren.routing.rule import RuleNode


def resolve_target(import_string: str) -> Router | RuleGroup:
    """Import ``"module:attribute"`` and return the Router or RuleGroup it names.

    The attribute defaults to ``router`` when omitted.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the attribute is neither a Router nor a RuleGroup.
    """
    module_path, _, attr_name = import_string.partition(":")
    obj = getattr(importlib.import_module(module_path), attr_name or "router")
    if not isinstance(obj, Router | RuleGroup):
        msg = f"{import_string!r} is a {type(obj).__name__}; expected a wren Router or RuleGroup"
        raise TypeError(msg)
    return obj


def compile_target(target: Router | RuleGroup) -> tuple[RuleNode, ...]:
    """Compile a Router, or build the pending resources of a bare tree."""
    if isinstance(target, Router):
        return target.compile()
    build_pending(target)
    return tuple(target.rules())
