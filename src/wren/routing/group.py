"""RuleGroup — ordered tree of rules and nested groups.

Groups carry a domain and an option set that descendants inherit.
Children are owned by their parent; the parent link is a weak
reference used only for inheritance lookups. Rules hold their owning
group and record their full path and domain when registered.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterator
from typing import Any, Self

from wren.errors import ConfigurationError
from wren.routing.params import parse_pattern
from wren.routing.rule import RuleNode

logger = logging.getLogger("wren.routing")

VERBS: frozenset[str] = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "*"}
)

DEFAULT_DOMAIN = "-"


class RuleGroup:
    """A named container of ``RuleNode`` and ``RuleGroup`` children.

    Usage::

        root = RuleGroup()
        api = RuleGroup("api", root)
        api.set_option("complete_match", True)
        api.add_rule("users/<id>", "user/read", "GET")

    Iterating a group yields its direct children in insertion order and
    always reflects the current state of the tree.
    """

    __slots__ = ("__weakref__", "_children", "_domain", "_options", "_parent", "name")

    def __init__(
        self,
        name: str = "",
        parent: RuleGroup | None = None,
        *,
        domain: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        self.name = name.strip("/")
        self._parent: weakref.ref[RuleGroup] | None = (
            weakref.ref(parent) if parent is not None else None
        )
        self._domain = domain
        self._options: dict[str, Any] = dict(options or {})
        self._children: list[RuleNode | RuleGroup] = []
        if parent is not None:
            parent.add_child(self)

    # -- Tree --

    @property
    def parent(self) -> RuleGroup | None:
        return self._parent() if self._parent is not None else None

    @property
    def full_name(self) -> str:
        """Slash-joined names from the root down to this group."""
        parent = self.parent
        prefix = parent.full_name if parent is not None else ""
        return "/".join(part for part in (prefix, self.name) if part)

    def add_child(self, child: RuleNode | RuleGroup) -> None:
        if isinstance(child, RuleNode):
            child.attach(self)
        else:
            child._parent = weakref.ref(self)
        self._children.append(child)

    def remove_child(self, child: RuleNode | RuleGroup) -> None:
        """Detach *child*. Only used before the tree is frozen."""
        self._children.remove(child)
        if isinstance(child, RuleGroup):
            child._parent = None
        else:
            child.detach()

    def group(self, name: str, *, domain: str | None = None) -> RuleGroup:
        """Create and return a child group."""
        return RuleGroup(name, self, domain=domain)

    def add_rule(self, path: str, target: str, verb: str = "*", **options: Any) -> RuleNode:
        """Register a single rule in this group and return it."""
        node = self.make_rule(path, target, verb, **options)
        self.add_child(node)
        logger.debug("Registered %s %s -> %s", node.verb, node.full_path, node.target)
        return node

    def make_rule(
        self,
        path: str,
        target: str,
        verb: str = "*",
        *,
        action_key: str | None = None,
        **options: Any,
    ) -> RuleNode:
        """Build a rule bound to this group without registering it."""
        verb = verb.upper()
        if verb not in VERBS:
            msg = f"Unknown HTTP verb {verb!r} for rule {path!r}"
            raise ConfigurationError(msg)
        parse_pattern(path)
        complete = options.pop("complete_match", self.get_option("complete_match", False))
        node = RuleNode(
            verb=verb,
            path=path.strip("/"),
            target=target,
            action_key=action_key,
            complete_match=bool(complete),
            options=options,
        )
        node.group = self
        return node

    def __iter__(self) -> Iterator[RuleNode | RuleGroup]:
        yield from self._children

    def __len__(self) -> int:
        return len(self._children)

    def rules(self) -> Iterator[RuleNode]:
        """Yield every rule below this group, depth-first, in insertion order."""
        for child in self._children:
            if isinstance(child, RuleGroup):
                yield from child.rules()
            else:
                yield child

    def groups(self) -> Iterator[RuleGroup]:
        """Yield this group and every nested group, depth-first."""
        yield self
        for child in self._children:
            if isinstance(child, RuleGroup):
                yield from child.groups()

    # -- Inherited attributes --

    def get_domain(self) -> str:
        """Domain of the nearest group that defines one."""
        if self._domain is not None:
            return self._domain
        parent = self.parent
        if parent is not None:
            return parent.get_domain()
        return DEFAULT_DOMAIN

    def set_domain(self, domain: str) -> Self:
        self._domain = domain
        return self

    def set_option(self, key: str, value: Any) -> Self:
        self._options[key] = value
        return self

    def get_option(self, key: str, default: Any = None) -> Any:
        """Look up *key* locally, then along the ancestor chain."""
        if key in self._options:
            return self._options[key]
        parent = self.parent
        if parent is not None:
            return parent.get_option(key, default)
        return default

    @property
    def options(self) -> dict[str, Any]:
        """A copy of the options declared on this group only."""
        return dict(self._options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, children={len(self._children)})"
