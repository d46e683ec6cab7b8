"""``routefile routes`` — list routes in declaration order."""

import argparse

from routefile.cli._load import load_or_exit


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of ORDER, METHOD, PATH, and ACTION for a route file."""
    table = load_or_exit(args)

    if not len(table):
        print("No routes defined.")
        return

    rows = [(str(r.order), r.method, r.path, str(r.action)) for r in table]

    # Column widths, never narrower than the headers
    max_order = max(max(len(r[0]) for r in rows), 5)
    max_method = max(max(len(r[1]) for r in rows), 6)
    max_path = max(max(len(r[2]) for r in rows), 4)

    fmt = f"{{:<{max_order}}}  {{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("ORDER", "METHOD", "PATH", "ACTION"))
    sep_len = max_order + max_method + max_path + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
