"""Output handlers, one per OutputKind.

Each handler converts response data to a string and declares the
content type and default status that go with it.
"""

import json as json_module
import logging
import pprint
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar, Protocol

from kida import Environment, FileSystemLoader

from wren.config import RouterConfig
from wren.errors import ConfigurationError, OutputError

logger = logging.getLogger("wren.output")


class OutputKind(Enum):
    HTML = "html"
    JSON = "json"
    XML = "xml"
    VIEW = "view"
    REDIRECT = "redirect"


class OutputHandler(Protocol):
    """What ``Response.render()`` needs from a handler."""

    content_type: ClassVar[str]
    status: ClassVar[int | None]

    def output(self, data: Any, options: Mapping[str, Any]) -> str: ...


class HtmlOutput:
    """Pass-through output. Containers are pretty-printed."""

    content_type: ClassVar[str] = "text/html"
    status: ClassVar[int | None] = None

    def output(self, data: Any, options: Mapping[str, Any]) -> str:
        match data:
            case None:
                return ""
            case str():
                return data
            case bool() | int() | float():
                return str(data)
            case dict() | list() | tuple():
                return pprint.pformat(data)
            case _:
                msg = f"Cannot render {type(data).__name__} as response content"
                raise OutputError(msg)


class JsonOutput:
    content_type: ClassVar[str] = "application/json"
    status: ClassVar[int | None] = None

    def output(self, data: Any, options: Mapping[str, Any]) -> str:
        try:
            return json_module.dumps(
                data,
                ensure_ascii=options.get("ensure_ascii", False),
                indent=options.get("indent"),
            )
        except TypeError as exc:
            raise OutputError(f"Cannot encode response data as JSON: {exc}") from exc


class XmlOutput:
    """Mapping/sequence data as an XML document.

    Options: ``root_node`` (default ``"root"``) and ``item_node``
    (default ``"item"``) for sequence members.
    """

    content_type: ClassVar[str] = "text/xml"
    status: ClassVar[int | None] = None

    def output(self, data: Any, options: Mapping[str, Any]) -> str:
        root = ET.Element(options.get("root_node", "root"))
        self._fill(root, data, options.get("item_node", "item"))
        body = ET.tostring(root, encoding="unicode")
        return f'<?xml version="1.0" encoding="utf-8"?>{body}'

    def _fill(self, element: ET.Element, data: Any, item_node: str) -> None:
        if isinstance(data, Mapping):
            for key, value in data.items():
                self._fill(ET.SubElement(element, str(key)), value, item_node)
        elif isinstance(data, list | tuple):
            for index, value in enumerate(data):
                child = ET.SubElement(element, item_node, id=str(index))
                self._fill(child, value, item_node)
        elif data is not None:
            element.text = str(data)


class ViewOutput:
    """Template output rendered with kida.

    Options: ``template`` (required), ``vars`` (merged under mapping
    data), ``replace`` (literal substitutions on the rendered text).
    """

    content_type: ClassVar[str] = "text/html"
    status: ClassVar[int | None] = None

    def __init__(self, env: Environment) -> None:
        self.env = env

    def output(self, data: Any, options: Mapping[str, Any]) -> str:
        name = options.get("template")
        if not name:
            msg = "View output needs a 'template' option"
            raise OutputError(msg)

        context = dict(options.get("vars") or {})
        if isinstance(data, Mapping):
            context.update(data)
        elif data is not None:
            context["data"] = data

        logger.debug("Rendering view %r", name)
        html = self.env.get_template(name).render(context)
        for old, new in (options.get("replace") or {}).items():
            html = html.replace(old, new)
        return html


class RedirectOutput:
    """Data is the target URL; the body stays empty."""

    content_type: ClassVar[str] = "text/html"
    status: ClassVar[int | None] = 302

    def output(self, data: Any, options: Mapping[str, Any]) -> str:
        return ""


def create_environment(config: RouterConfig) -> Environment:
    """Create a kida Environment for view output from configuration."""
    if config.template_dir is None:
        msg = (
            "View output requires templates. "
            "Set template_dir in RouterConfig or pass a kida Environment."
        )
        raise ConfigurationError(msg)
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
    )


def coerce_kind(kind: OutputKind | str) -> OutputKind:
    """Return *kind* as an OutputKind, raising ``ConfigurationError`` if unknown."""
    try:
        return OutputKind(kind)
    except ValueError:
        msg = f"Unknown output kind {kind!r}"
        raise ConfigurationError(msg) from None


def handler_for(
    kind: OutputKind | str,
    config: RouterConfig | None = None,
    env: Environment | None = None,
) -> OutputHandler:
    """Return the handler for *kind*.

    Raises ``ConfigurationError`` for an unknown kind.
    """
    match coerce_kind(kind):
        case OutputKind.HTML:
            return HtmlOutput()
        case OutputKind.JSON:
            return JsonOutput()
        case OutputKind.XML:
            return XmlOutput()
        case OutputKind.VIEW:
            return ViewOutput(env or create_environment(config or RouterConfig()))
        case OutputKind.REDIRECT:
            return RedirectOutput()
