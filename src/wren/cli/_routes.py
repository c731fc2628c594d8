"""``wren routes`` — list compiled rules.

Resolves an import string to a Router or RuleGroup, compiles it, and prints every
rule with verb, full path, and target.
"""

import argparse
import json as json_module
import logging
import sys

from wren.cli._resolve import compile_target, resolve_target
from wren.config import RouterConfig
from wren.errors import ConfigurationError
from wren.routing.router import Router
from wren.routing.rule import RuleNode

logger = logging.getLogger("wren.cli")


def _describe(node: RuleNode) -> str:
    parts = [node.target]
    if node.complete_match:
        parts.append("(complete)")
    if node.model is not None:
        parts.append(f"model={node.model!r}")
    if node.validate is not None:
        parts.append(f"validate={node.validate!r}")
    return " ".join(parts)


def rule_rows(rules: tuple[RuleNode, ...]) -> list[tuple[str, str, str]]:
    """Rows of (verb, full path, description) in registration order."""
    return [(node.verb, node.full_path or "/", _describe(node)) for node in rules]


def run_routes(args: argparse.Namespace) -> None:
    """Compile the Router or RuleGroup named by ``args.router`` and print its rules."""
    try:
        target = resolve_target(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    # No-op when --log-level already configured logging
    config = target.config if isinstance(target, Router) else RouterConfig()
    logging.basicConfig(level=config.log_level.upper())

    try:
        rules = compile_target(target)
    except ConfigurationError as exc:
        logger.error("Route compilation failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.json:
        payload = [
            {
                "verb": node.verb,
                "path": node.full_path,
                "target": node.target,
                "domain": node.domain,
                "complete_match": node.complete_match,
                "model": node.model,
                "validate": node.validate,
            }
            for node in rules
        ]
        print(json_module.dumps(payload, indent=2, default=repr))
        return

    if not rules:
        print("No rules registered.")
        return

    rows = rule_rows(rules)

    # Column widths
    max_verb = max(max(len(r[0]) for r in rows), 4)  # "VERB" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_verb}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("VERB", "PATH", "TARGET"))
    sep_len = max_verb + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for verb, path, description in rows:
        print(fmt.format(verb, path, description))
