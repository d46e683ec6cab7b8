"""Shared route file loading for CLI commands."""

import argparse
import sys

from routefile.errors import RouteFileError
from routefile.routing.loader import load_file
from routefile.routing.router import RouteTable


def load_or_exit(args: argparse.Namespace) -> RouteTable:
    """Load ``args.file`` with ``args.prefix``; print the error and exit 1 on failure."""
    try:
        return load_file(args.file, prefix=args.prefix)
    except RouteFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if exc.text:
            print(f"    {exc.text}", file=sys.stderr)
        raise SystemExit(1) from exc
