"""Wren exception hierarchy.

Shared across the routing tree, resource compiler, and output handlers
so every module raises and catches the same types.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a route or resource definition is invalid.

    Typically raised while a resource builds its rules, at startup.
    A failed build never leaves partial rules in the tree.
    """


class OutputError(WrenError):
    """Raised when an output handler cannot produce string content."""
