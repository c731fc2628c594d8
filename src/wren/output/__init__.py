"""Output — turn handler data into response content.

A closed set of output kinds (html, json, xml, view, redirect), each
with one handler class, selected by tag. ``Response`` is a per-request
value built through ``with_*()`` calls and rendered once.
"""

from wren.output.handlers import (
    HtmlOutput,
    JsonOutput,
    OutputHandler,
    OutputKind,
    RedirectOutput,
    ViewOutput,
    XmlOutput,
    handler_for,
)
from wren.output.response import RenderedResponse, Response

__all__ = [
    "HtmlOutput",
    "JsonOutput",
    "OutputHandler",
    "OutputKind",
    "RedirectOutput",
    "RenderedResponse",
    "Response",
    "ViewOutput",
    "XmlOutput",
    "handler_for",
]
