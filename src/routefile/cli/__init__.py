"""routefile CLI — inspect, lint, and serve route files.

Entry point registered as ``routefile`` in ``pyproject.toml``::

    [project.scripts]
    routefile = "routefile.cli:main"
"""

import argparse
import sys


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Route definition file")
    parser.add_argument("--prefix", default="", help="Servlet prefix prepended to every path")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routefile`` command."""
    parser = argparse.ArgumentParser(
        prog="routefile",
        description="routefile — Play-style route files for Python web apps.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- routefile routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes in declaration order")
    _add_source_args(routes_parser)

    # -- routefile check --------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a route file")
    _add_source_args(check_parser)
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat shadowed (unreachable) routes as errors",
    )

    # -- routefile match --------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Resolve a request against a route file")
    _add_source_args(match_parser)
    match_parser.add_argument("method", help="HTTP method (e.g. GET)")
    match_parser.add_argument("path", help="Request path (e.g. /page/home)")

    # -- routefile run ----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve a RouterApp")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--reload", action="store_true", help="Restart on source changes")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "routes":
        from routefile.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from routefile.cli._check import run_check

        run_check(args)
    elif args.command == "match":
        from routefile.cli._match import run_match

        run_match(args)
    elif args.command == "run":
        from routefile.cli._run import run_server

        run_server(args)
