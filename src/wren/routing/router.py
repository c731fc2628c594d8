"""Router — the registration context that owns the rule tree.

Rules, groups, and resources are declared during setup and compiled
into an immutable tree when the router freezes.
"""

import logging
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Self

from wren.config import RouterConfig
from wren.routing.group import RuleGroup
from wren.routing.resource import Resource
from wren.routing.rest import DEFAULT_REST, RestAction, merge_rest
from wren.routing.rule import RuleNode

logger = logging.getLogger("wren.routing")


class Router:
    """Declarative rule registry compiled into a frozen tree.

    Usage::

        router = Router()
        router.rule("health", "status/ping", "GET")
        with router.using(router.group("admin")):
            router.resource("blog.comment", "admin/comment", only=["index", "read"])
        rules = router.compile()

    Thread safety:
        Declaration is single-threaded (module import / app startup).
        ``compile()`` uses a Lock + double-check so exactly one thread
        builds the tree; afterwards the tree is read-only and may be
        shared freely. To reconfigure, build a new Router and swap the
        reference.
    """

    __slots__ = ("_compiled", "_freeze_lock", "_rest", "_root", "_stack", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._root = RuleGroup(domain=self.config.default_domain)
        self._stack: list[RuleGroup] = [self._root]
        self._rest: dict[str, RestAction] = dict(DEFAULT_REST)
        self._compiled = False
        self._freeze_lock = threading.Lock()

    # -- Context --

    @property
    def root(self) -> RuleGroup:
        return self._root

    @property
    def current_group(self) -> RuleGroup:
        return self._stack[-1]

    @property
    def is_eager(self) -> bool:
        return self.config.eager

    @property
    def compiled(self) -> bool:
        return self._compiled

    @contextmanager
    def using(self, group: RuleGroup) -> Iterator[RuleGroup]:
        """Make *group* the target of registrations inside the block."""
        self._stack.append(group)
        try:
            yield group
        finally:
            self._stack.pop()

    # -- Registration --

    def rule(self, path: str, target: str, verb: str = "*", **options: Any) -> RuleNode:
        """Register one rule in the current group."""
        self._check_not_compiled()
        return self.current_group.add_rule(path, target, verb, **options)

    def group(self, name: str, *, domain: str | None = None) -> RuleGroup:
        """Create a child of the current group."""
        self._check_not_compiled()
        return self.current_group.group(name, domain=domain)

    def resource(
        self,
        name: str,
        target: str,
        *,
        rest: Mapping[str, Any] | None = None,
        only: list[str] | None = None,
        except_: list[str] | None = None,
        vars: Mapping[str, str] | None = None,  # noqa: A002 — mirrors Resource.vars()
        model: Mapping[str, Any] | None = None,
        validate: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Resource:
        """Declare a resource under the current group.

        The resource gets a copy of the router's REST table unless
        *rest* is given. In eager mode its rules are built immediately.
        """
        self._check_not_compiled()
        for key, value in (
            ("only", only),
            ("except", except_),
            ("var", vars),
            ("resource_model", model),
            ("resource_validate", validate),
        ):
            if value is not None:
                options[key] = value
        table = rest if rest is not None else self._rest
        return Resource(self, self.current_group, name, target, table, options)

    def rest(
        self,
        name: str | Mapping[str, Any],
        action: Any = None,
        *,
        replace: bool = False,
    ) -> Self:
        """Change the default REST table for resources declared afterwards."""
        self._check_not_compiled()
        self._rest = merge_rest(self._rest, name, action, replace=replace)
        return self

    @property
    def rest_table(self) -> dict[str, RestAction]:
        return dict(self._rest)

    # -- Compilation --

    def compile(self) -> tuple[RuleNode, ...]:
        """Build every pending resource, freeze, and return all rules.

        Safe to call more than once; later calls return the same rules.
        """
        if not self._compiled:
            with self._freeze_lock:
                if not self._compiled:
                    self._build_pending()
                    self._compiled = True
        return tuple(self._root.rules())

    def _build_pending(self) -> None:
        count = build_pending(self._root)
        logger.debug("Compiled %d resource(s)", count)

    @property
    def rules(self) -> list[RuleNode]:
        """All registered rules in insertion order."""
        return list(self._root.rules())

    def _check_not_compiled(self) -> None:
        if self._compiled:
            msg = (
                "Cannot register rules after the router was compiled. "
                "Build a new Router and swap it in to reconfigure."
            )
            raise RuntimeError(msg)


def build_pending(root: RuleGroup) -> int:
    """Build every unbuilt resource below *root*, in tree order.

    Returns how many resources were built. Stops at the first
    ``ConfigurationError``; resources built before it stay built.
    """
    pending = [g for g in root.groups() if isinstance(g, Resource) and not g.built]
    for resource in pending:
        resource.build()
    return len(pending)
