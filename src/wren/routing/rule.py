"""RuleNode — one concrete (verb, pattern, target) routing rule."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from wren.routing.params import pattern_variables

if TYPE_CHECKING:
    from wren.routing.group import RuleGroup


def _join(*parts: str) -> str:
    return "/".join(part for part in parts if part)


@dataclass(slots=True)
class RuleNode:
    """A compiled routing rule.

    ``path`` is relative to the owning group. When the node is
    registered its ``full_path`` and ``domain`` are recorded, so they do
    not change if ancestors are later dropped. Everything except the
    ``model`` and ``validate`` bindings is fixed from then on.
    """

    verb: str
    path: str
    target: str
    action_key: str | None = None
    complete_match: bool = False
    options: dict[str, Any] = field(default_factory=dict)
    model: Any = None
    validate: Any = None
    group: RuleGroup | None = field(default=None, repr=False, compare=False)
    _full_path: str | None = field(default=None, repr=False, compare=False)
    _domain: str | None = field(default=None, repr=False, compare=False)

    def attach(self, group: RuleGroup) -> None:
        """Record *group* as owner and fix the path and domain it implies."""
        self.group = group
        self._full_path = _join(group.full_name, self.path)
        self._domain = group.get_domain()

    def detach(self) -> None:
        self.group = None
        self._full_path = None
        self._domain = None

    @property
    def full_path(self) -> str:
        if self._full_path is not None:
            return self._full_path
        # Built but not yet registered: follow the group as it is now
        if self.group is not None:
            return _join(self.group.full_name, self.path)
        return self.path

    @property
    def domain(self) -> str | None:
        if self._domain is not None:
            return self._domain
        return self.group.get_domain() if self.group is not None else None

    @property
    def variables(self) -> tuple[str, ...]:
        """Placeholder names in ``full_path``, outermost first."""
        return pattern_variables(self.full_path)

    def get_option(self, key: str, default: Any = None) -> Any:
        """Look up *key* on this rule, then along the owning group chain."""
        if key in self.options:
            return self.options[key]
        if self.group is None:
            return default
        return self.group.get_option(key, default)

    def as_triple(self) -> tuple[str, str, str]:
        return (self.verb, self.full_path, self.target)
