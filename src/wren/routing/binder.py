"""Attribute binding — attach model and validator specs to emitted rules.

Specs are opaque: the binder stores them for the handler-dispatch layer
to interpret and never inspects their shape.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from wren.errors import ConfigurationError

if TYPE_CHECKING:
    from wren.routing.resource import Resource
    from wren.routing.rule import RuleNode

logger = logging.getLogger("wren.routing")


class BindingKind(Enum):
    MODEL = "model"
    VALIDATE = "validate"


def _coerce_kind(kind: BindingKind | str) -> BindingKind:
    if isinstance(kind, BindingKind):
        return kind
    try:
        return BindingKind(kind)
    except ValueError:
        msg = f"Unknown binding kind {kind!r}; expected 'model' or 'validate'"
        raise ConfigurationError(msg) from None


def bind(node: RuleNode, kind: BindingKind | str, spec: Any) -> RuleNode:
    """Attach *spec* to *node*, replacing any earlier binding of *kind*."""
    kind = _coerce_kind(kind)
    if kind is BindingKind.MODEL:
        node.model = spec
    else:
        node.validate = spec
    logger.debug("Bound %s to %s %s", kind.value, node.verb, node.full_path)
    return node


class AttributeBinder:
    """Stateless binder used by resources and by callers after compilation.

    Usage::

        AttributeBinder.bind(node, "model", "app.model.Post")
        AttributeBinder.bind_action(resource, "update", BindingKind.VALIDATE, PostForm)
    """

    bind = staticmethod(bind)

    @staticmethod
    def bind_action(
        resource: Resource,
        action_key: str,
        kind: BindingKind | str,
        spec: Any,
    ) -> RuleNode:
        """Bind *spec* to the rule *resource* emitted for *action_key*.

        Raises ``KeyError`` if that action was filtered out or the
        resource has not been built.
        """
        return bind(resource.node_for(action_key), kind, spec)
