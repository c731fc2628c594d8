"""Wren CLI — inspect compiled route tables.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — resource route table compiler.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: the router config's log_level)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled rules")
    routes_parser.add_argument(
        "router",
        help="Import string of a Router or RuleGroup (e.g. myapp.routes:router)",
    )
    routes_parser.add_argument(
        "--json",
        action="store_true",
        help="Print rules as JSON instead of a table",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.log_level:
        logging.basicConfig(level=args.log_level.upper())

    if args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
