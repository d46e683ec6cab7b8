"""``routefile run`` — serve a RouterApp with pounce."""

import argparse
import sys

from routefile.cli._resolve import resolve_app
from routefile.errors import ConfigurationError, RouteFileError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and start the server.

    Host and port fall back to the dispatcher's ``RouterConfig``.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, RouteFileError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    config = app.dispatcher.config
    host = args.host or config.host
    port = args.port or config.port

    from routefile.server.dev import run_server as _serve

    try:
        _serve(app, host, port, reload=args.reload, app_path=args.app)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
