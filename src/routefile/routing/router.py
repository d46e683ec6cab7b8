"""Route table with ordered, first-match-wins matching.

The table is a plain tuple scanned in declaration order. Route files are
small and their order is a user-visible contract (an earlier, more
specific route deliberately shadows a later, general one), so a linear
scan is both fast enough and trivially predictable.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from urllib.parse import quote, unquote

from routefile.errors import ReverseError
from routefile.routing.pattern import split_path
from routefile.routing.route import (
    CompiledRoute,
    MatchResult,
    NoRouteFound,
    RouteMatch,
    ShadowedRoute,
)


@dataclass(frozen=True, slots=True)
class RouteTable:
    """An immutable, ordered collection of compiled routes.

    Usage::

        table = load(open("routes.conf").read(), prefix="/app")
        result = table.match("GET", "/app/page/home")
        if result:
            result.route.action, result.path_params

    Safe to share between threads and tasks: nothing in it changes after
    construction. To reconfigure, build a new table and swap the reference.
    """

    routes: tuple[CompiledRoute, ...]
    prefix: str = ""
    shadowed: tuple[ShadowedRoute, ...] = ()

    def __len__(self) -> int:
        return len(self.routes)

    def __iter__(self) -> Iterator[CompiledRoute]:
        return iter(self.routes)

    def match(self, method: str, path: str) -> MatchResult:
        """Resolve a request to the first route that accepts it.

        Returns a ``RouteMatch`` with percent-decoded parameters, or a
        ``NoRouteFound`` carrying the original *method* and *path*.
        Never raises for an unmatched request.
        """
        normalized = method.upper()
        parts = split_path(path)

        for route in self.routes:
            if not route.accepts_method(normalized):
                continue
            captured = route.matcher(parts)
            if captured is None:
                continue
            params = {
                name: unquote(value)
                for name, value in zip(route.param_names, captured, strict=True)
            }
            return RouteMatch(route=route, path_params=params, raw_path=path, raw_method=method)

        return NoRouteFound(method=method, path=path)

    def reverse(self, reference: str, params: Mapping[str, str] | None = None) -> str:
        """Build a path for an action reference (``"Controller.method"``).

        Picks the first route, in declaration order, pointing at
        *reference* whose parameter names are exactly the keys of *params*
        and whose constraints accept the values. Values are percent-encoded.

        Raises ``ReverseError`` if no route fits.
        """
        params = dict(params or {})
        for route in self.routes:
            if route.action.reference != reference:
                continue
            if set(route.param_names) != set(params):
                continue
            parts: list[str] = []
            for seg in route.segments:
                if not seg.is_param:
                    parts.append(seg.value)
                    continue
                assert seg.param_name is not None
                encoded = quote(str(params[seg.param_name]), safe="")
                if re.fullmatch(seg.pattern, encoded) is None:
                    break
                parts.append(encoded)
            else:
                return "/" + "/".join(parts)

        names = ", ".join(sorted(params)) or "no params"
        msg = f"No route for {reference} with {names}"
        raise ReverseError(msg)


def match(table: RouteTable, method: str, path: str) -> MatchResult:
    """Function form of ``RouteTable.match``."""
    return table.match(method, path)
