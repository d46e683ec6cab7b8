"""``routefile match`` — resolve one request against a route file."""

import argparse

from routefile.cli._load import load_or_exit
from routefile.routing.route import RouteMatch


def run_match(args: argparse.Namespace) -> None:
    """Print the winning route and its params, or exit 1 if nothing matches."""
    table = load_or_exit(args)
    result = table.match(args.method, args.path)

    if not isinstance(result, RouteMatch):
        print(f"No route found for {result.method} {result.path}")
        raise SystemExit(1)

    route = result.route
    print(f"{route.method} {route.path} -> {route.action} (line {route.line})")
    for name, value in result.path_params.items():
        print(f"  {name} = {value}")
