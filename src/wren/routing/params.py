"""Path pattern parsing.

Rule patterns use ``<name>`` placeholders, e.g. ``blog/<blog_id>/comment/<id>``.
"""

from dataclasses import dataclass

from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a rule pattern.

    Static:  ``comment``   (is_param=False)
    Param:   ``<id>``      (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a rule pattern into segments.

    Examples::

        "blog"              -> [PathSegment("blog")]
        "blog/<id>"         -> [PathSegment("blog"), PathSegment("<id>", is_param=True, ...)]
        "blog/<id>/edit"    -> [..., PathSegment("edit")]

    Raises ``ConfigurationError`` for ``{name}`` placeholders and for
    unbalanced or empty ``<...>`` markers.
    """
    segments: list[PathSegment] = []
    for part in pattern.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            msg = (
                f"Invalid placeholder in {pattern!r}: wren uses <param> placeholders, "
                f"not {{param}}. Rewrite {part!r} as <{part[1:-1]}>."
            )
            raise ConfigurationError(msg)
        if part.startswith("<") and part.endswith(">"):
            name = part[1:-1]
            if not name or "<" in name or ">" in name:
                msg = f"Malformed placeholder {part!r} in pattern {pattern!r}"
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        elif "<" in part or ">" in part:
            msg = f"Malformed placeholder {part!r} in pattern {pattern!r}"
            raise ConfigurationError(msg)
        else:
            segments.append(PathSegment(value=part))
    return segments


def pattern_variables(pattern: str) -> tuple[str, ...]:
    """Return the placeholder names of *pattern* in order."""
    return tuple(seg.param_name for seg in parse_pattern(pattern) if seg.param_name)
