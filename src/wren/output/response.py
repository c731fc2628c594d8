"""Per-request response value with chainable .with_*() transformations.

Each transformation returns a new Response. One is created per request
and passed along explicitly; nothing is shared between requests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from kida import Environment

from wren.config import RouterConfig
from wren.errors import OutputError
from wren.output.handlers import OutputKind, coerce_kind, handler_for

logger = logging.getLogger("wren.output")


@dataclass(frozen=True, slots=True)
class RenderedResponse:
    """Final status, headers, and body produced by ``Response.render()``."""

    body: str
    status: int
    content_type: str
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, name: str) -> str | None:
        """Return the last value of header *name* (case-insensitive)."""
        lower = name.lower()
        for key, value in reversed(self.headers):
            if key.lower() == lower:
                return value
        return None


@dataclass(frozen=True, slots=True)
class Response:
    """Handler data plus how to present it.

    ``kind`` selects the output handler. When it is ``None`` the kind
    comes from ``RouterConfig.default_output`` (or ``ajax_output`` for
    ajax requests) at render time.
    """

    data: Any = ""
    kind: OutputKind | None = None
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
    options: Mapping[str, Any] = field(default_factory=dict)

    # -- Chainable transformations --

    def with_data(self, data: Any) -> Response:
        return replace(self, data=data)

    def with_kind(self, kind: OutputKind | str) -> Response:
        return replace(self, kind=coerce_kind(kind))

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_options(self, **options: Any) -> Response:
        """Return a new Response with handler options merged in."""
        return replace(self, options={**self.options, **options})

    # -- Cache headers --

    def last_modified(self, value: str) -> Response:
        return self.with_header("Last-Modified", value)

    def expires(self, value: str) -> Response:
        return self.with_header("Expires", value)

    def etag(self, value: str) -> Response:
        return self.with_header("ETag", value)

    def cache_control(self, value: str) -> Response:
        return self.with_header("Cache-Control", value)

    # -- Rendering --

    def resolve_kind(self, config: RouterConfig, *, is_ajax: bool = False) -> OutputKind:
        if self.kind is not None:
            return self.kind
        return coerce_kind(config.ajax_output if is_ajax else config.default_output)

    def render(
        self,
        config: RouterConfig | None = None,
        *,
        env: Environment | None = None,
        is_ajax: bool = False,
    ) -> RenderedResponse:
        """Run the output handler and assemble the final response.

        Raises ``OutputError`` if the handler does not produce a string.
        """
        config = config or RouterConfig()
        kind = self.resolve_kind(config, is_ajax=is_ajax)
        handler = handler_for(kind, config, env)

        body = handler.output(self.data, self.options)
        if not isinstance(body, str):
            msg = f"{type(handler).__name__} produced {type(body).__name__}, expected str"
            raise OutputError(msg)

        status = self.status
        if handler.status is not None and status == 200:
            status = handler.status

        headers = self.headers
        if kind is OutputKind.REDIRECT:
            if not self.data:
                msg = "Redirect output needs a target URL as data"
                raise OutputError(msg)
            headers = (*headers, ("Location", str(self.data)))

        logger.debug("Rendered %s response (%d, %d chars)", kind.value, status, len(body))
        return RenderedResponse(
            body=body,
            status=status,
            content_type=f"{handler.content_type}; charset={config.charset}",
            headers=headers,
        )
