"""Resource routes — expand a REST action table into concrete rules.

A resource named ``blog`` with the default table emits seven rules
(``blog``, ``blog/create``, ``blog/<id>``, ...). Dotted names nest:
``blog.comment`` emits ``blog/<blog_id>/comment/<id>`` and friends.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Self

from wren.errors import ConfigurationError
from wren.routing.binder import BindingKind, bind
from wren.routing.group import RuleGroup
from wren.routing.rest import DEFAULT_REST, RestAction, merge_rest, normalize_rest
from wren.routing.rule import RuleNode

if TYPE_CHECKING:
    from wren.routing.router import Router

logger = logging.getLogger("wren.routing")


def _action_keys(option: str, value: Any) -> frozenset[str]:
    """Coerce an ``only``/``except`` value into a set of action keys."""
    if value is None:
        return frozenset()
    if isinstance(value, str) or not isinstance(value, Iterable):
        msg = f"Option {option!r} must be a list of action keys, got {value!r}"
        raise ConfigurationError(msg)
    keys = tuple(value)
    if not all(isinstance(key, str) for key in keys):
        msg = f"Option {option!r} must contain only string action keys, got {value!r}"
        raise ConfigurationError(msg)
    return frozenset(keys)


def _split_name(name: str) -> list[str]:
    if not name:
        msg = "Resource name must not be empty"
        raise ConfigurationError(msg)
    segments = name.split(".")
    if not all(segments):
        msg = f"Malformed resource name {name!r}: empty segment between dots"
        raise ConfigurationError(msg)
    return segments


class Resource(RuleGroup):
    """A group whose rules are generated from a REST action table.

    Usage::

        root = RuleGroup()
        res = Resource(None, root, "blog.comment", "app/comment")
        res.only(["index", "read"]).vars({"comment": "cid"})
        res.build()

    Options (``only``, ``except``, ``var``, ``resource_model``,
    ``resource_validate``, ``complete_match``) are read at build time
    and fall back to ancestor groups when not set on the resource.
    """

    __slots__ = ("_built", "_nodes", "_rest", "_router", "resource", "target")

    def __init__(
        self,
        router: Router | None,
        parent: RuleGroup | None,
        name: str,
        target: str = "",
        rest: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        name = name.lstrip("/")
        segments = _split_name(name)
        table = normalize_rest(rest) if rest is not None else dict(DEFAULT_REST)

        complete = router.config.complete_match if router is not None else True
        super().__init__(segments[0], parent, options={"complete_match": complete, **(options or {})})

        self._router = router
        self.resource = name
        self.target = target
        self._rest: dict[str, RestAction] = table
        self._nodes: dict[str, RuleNode] = {}
        self._built = False

        if router is not None and router.config.eager:
            self.build()

    @property
    def built(self) -> bool:
        return self._built

    @property
    def rest_table(self) -> dict[str, RestAction]:
        return dict(self._rest)

    # -- Build --

    def build(self) -> None:
        """Emit one rule per surviving REST action, in table order.

        Rules are committed to the group only when every action built
        cleanly. On ``ConfigurationError`` the resource detaches itself
        from its parent so sibling rules are left as they were.
        """
        if self._built:
            return
        try:
            nodes = self._build_nodes()
        except ConfigurationError:
            parent = self.parent
            if parent is not None:
                parent.remove_child(self)
            raise

        for node in nodes:
            self.add_child(node)
        self._nodes = {node.action_key: node for node in nodes if node.action_key}
        self._built = True
        logger.debug(
            "Built resource %r (%d of %d actions) under %r",
            self.resource,
            len(nodes),
            len(self._rest),
            self.full_name,
        )

    def _build_nodes(self) -> list[RuleNode]:
        rule = self.resource
        var: Mapping[str, str] = self.get_option("var") or {}
        only = _action_keys("only", self.get_option("only"))
        excluded = _action_keys("except", self.get_option("except"))
        models: Mapping[str, Any] = self.get_option("resource_model") or {}
        validators: Mapping[str, Any] = self.get_option("resource_validate") or {}

        last: str | None = None
        if "." in rule:
            *outer, last = rule.split(".")
            chain = [f"{seg}/<{var.get(seg, seg + '_id')}>" for seg in outer]
            rule = "/".join(chain) + "/" + last

        # Everything after the resource's own first segment
        prefix = rule[len(self.name) + 1 :]

        overlap = only & excluded
        if overlap:
            logger.warning(
                "Resource %r lists %s in both only and except; except wins",
                self.resource,
                sorted(overlap),
            )

        nodes: list[RuleNode] = []
        for key, entry in self._rest.items():
            if key in excluded or (only and key not in only):
                continue

            suffix = entry.suffix
            if last is not None and suffix and not suffix.startswith("/"):
                msg = (
                    f"REST action {key!r} suffix {suffix!r} must start with '/' "
                    f"to nest under {self.resource!r}"
                )
                raise ConfigurationError(msg)

            if "<id>" in suffix:
                if last is not None and last in var:
                    suffix = suffix.replace("<id>", f"<{var[last]}>")
                elif self.resource in var:
                    suffix = suffix.replace("<id>", f"<{var[self.resource]}>")

            node = self.make_rule(
                (prefix + suffix).strip("/"),
                f"{self.target}/{entry.action}",
                entry.verb,
                action_key=key,
            )
            if key in models:
                bind(node, BindingKind.MODEL, models[key])
            if key in validators:
                bind(node, BindingKind.VALIDATE, validators[key])
            nodes.append(node)
        return nodes

    def node_for(self, action_key: str) -> RuleNode:
        """Return the rule emitted for *action_key*."""
        try:
            return self._nodes[action_key]
        except KeyError:
            msg = f"Resource {self.resource!r} has no rule for action {action_key!r}"
            raise KeyError(msg) from None

    # -- Fluent options --

    def _check_not_built(self) -> None:
        if self._built:
            msg = (
                f"Cannot change resource {self.resource!r} after its rules were built. "
                "Pass options when declaring the resource."
            )
            raise RuntimeError(msg)

    def set_option(self, key: str, value: Any) -> Self:
        self._check_not_built()
        return super().set_option(key, value)

    def only(self, keys: Iterable[str]) -> Self:
        return self.set_option("only", _action_keys("only", keys))

    def except_(self, keys: Iterable[str]) -> Self:
        return self.set_option("except", _action_keys("except", keys))

    def vars(self, names: Mapping[str, str]) -> Self:
        return self.set_option("var", dict(names))

    def with_model(self, models: Mapping[str, Any]) -> Self:
        return self.set_option("resource_model", dict(models))

    def with_validate(self, validators: Mapping[str, Any]) -> Self:
        return self.set_option("resource_validate", dict(validators))

    def complete_match(self, value: bool = True) -> Self:
        return self.set_option("complete_match", value)

    def rest(
        self,
        name: str | Mapping[str, Any],
        action: Any = None,
        *,
        replace: bool = False,
    ) -> Self:
        """Add, replace, or swap out REST table entries before build."""
        self._check_not_built()
        self._rest = merge_rest(self._rest, name, action, replace=replace)
        return self


def compile_resource(
    name: str,
    target: str,
    rest: Mapping[str, Any] | None = None,
    options: Mapping[str, Any] | None = None,
    parent: RuleGroup | None = None,
) -> Resource:
    """Build a resource immediately and return its group.

    Without *parent* the resource hangs off a fresh root group.
    """
    resource = Resource(None, parent if parent is not None else RuleGroup(), name, target, rest, options)
    resource.build()
    return resource
