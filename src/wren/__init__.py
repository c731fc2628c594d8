"""Wren — compile REST resource declarations into routing rule trees.

Declare resources once at startup; get an ordered, immutable tree of
concrete (verb, pattern, target) rules back.

Basic usage::

    from wren import Router

    router = Router()
    router.resource("blog", "app/blog")
    router.resource("blog.comment", "app/comment", vars={"comment": "cid"})
    for rule in router.compile():
        print(rule.verb, rule.full_path, rule.target)

Output formatting (views rendered with kida)::

    from wren import Response, RouterConfig
    response = Response({"title": "Hi"}).with_kind("view").with_options(template="post.html")
    rendered = response.render(RouterConfig(template_dir="templates"))
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AttributeBinder",
    "BindingKind",
    "ConfigurationError",
    "OutputError",
    "OutputKind",
    "RenderedResponse",
    "Resource",
    "Response",
    "RestAction",
    "Router",
    "RouterConfig",
    "RuleGroup",
    "RuleNode",
    "WrenError",
    "compile_resource",
]

# public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AttributeBinder": "wren.routing.binder",
    "BindingKind": "wren.routing.binder",
    "ConfigurationError": "wren.errors",
    "OutputError": "wren.errors",
    "OutputKind": "wren.output.handlers",
    "RenderedResponse": "wren.output.response",
    "Resource": "wren.routing.resource",
    "Response": "wren.output.response",
    "RestAction": "wren.routing.rest",
    "Router": "wren.routing.router",
    "RouterConfig": "wren.config",
    "RuleGroup": "wren.routing.group",
    "RuleNode": "wren.routing.rule",
    "WrenError": "wren.errors",
    "compile_resource": "wren.routing.resource",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
