"""``routefile check`` — validate a route file.

Exits 1 if the file does not load. Shadowed routes are reported as
warnings, and as errors with ``--strict``.
"""

import argparse
import sys

from routefile.cli._load import load_or_exit


def run_check(args: argparse.Namespace) -> None:
    """Load and lint ``args.file``, printing results to stdout."""
    table = load_or_exit(args)

    for record in table.shadowed:
        print(f"warning: {record}")

    if table.shadowed and args.strict:
        print(f"{len(table.shadowed)} unreachable route(s)", file=sys.stderr)
        raise SystemExit(1)

    print(f"OK: {len(table)} routes")
