"""Linkway CLI — inspect the routes of a linkway app.

Entry point registered as ``linkway`` in ``pyproject.toml``::

    [project.scripts]
    linkway = "linkway.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``linkway`` command."""
    parser = argparse.ArgumentParser(
        prog="linkway",
        description="Linkway — deeplink routing and app lifecycle detection.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- linkway routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp.links:links)",
    )

    # -- linkway resolve --------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a deeplink without opening it")
    resolve_parser.add_argument(
        "app",
        help="Import string (e.g. myapp.links:links)",
    )
    resolve_parser.add_argument("url", help="Deeplink to resolve (e.g. myapp://user/42)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from linkway.cli._routes import run_routes

        run_routes(args)
    elif args.command == "resolve":
        from linkway.cli._lookup import run_resolve

        run_resolve(args)
