"""Route file loader.

Reads a Play-style route definition source and builds a ``RouteTable``.
One route per line::

    # Pages
    GET     /home                           PageController.showPage(id:'home')
    GET     /page/{id}                      PageController.showPage
    POST    /customer/{<[0-9]+>customerid}  CustomerController.createCustomer
    *       /health                         HealthController.check

Blank lines and ``#`` comments are skipped and do not count toward route
order. Loading is all-or-nothing: the first bad line raises
``RouteFileError`` and no table is produced.
"""

import logging
import re
from pathlib import Path

from routefile.errors import ActionSyntaxError, PatternError, RouteFileError
from routefile.routing.action import parse_action
from routefile.routing.pattern import compile_segments, join_prefix, parse_path
from routefile.routing.route import (
    ANY_METHOD,
    DEFAULT_CONSTRAINT,
    CompiledRoute,
    PathSegment,
    RouteDefinition,
    ShadowedRoute,
)
from routefile.routing.router import RouteTable

logger = logging.getLogger("routefile.routing")

HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", ANY_METHOD}
)

COMMENT_MARKER = "#"

_ARROW = "->"


def _split_line(line: str) -> tuple[str, str, str] | None:
    parts = line.split(None, 2)
    if len(parts) < 3:
        return None
    method, path, action = parts
    if action.startswith(_ARROW):
        action = action[len(_ARROW) :].strip()
        if not action:
            return None
    return method, path, action


def parse_line(line: str, order: int, prefix: str = "") -> RouteDefinition:
    """Parse one non-blank, non-comment line into a ``RouteDefinition``.

    Raises ``RouteFileError`` (without a line number) on a bad method or
    a missing column, ``ActionSyntaxError`` on a bad action.
    """
    split = _split_line(line)
    if split is None:
        msg = "Expected 'METHOD PATH ACTION'"
        raise RouteFileError(msg)
    method, path, action = split

    normalized = method.upper()
    if normalized not in HTTP_METHODS:
        msg = f"Unknown HTTP method {method!r}"
        raise RouteFileError(msg)

    return RouteDefinition(
        method=normalized,
        path_template=join_prefix(prefix, path),
        action=parse_action(action),
        order=order,
    )


def compile_route(definition: RouteDefinition, line: int | None = None) -> CompiledRoute:
    """Compile a ``RouteDefinition``. Raises ``PatternError`` on a bad template."""
    segments = tuple(parse_path(definition.path_template))
    return CompiledRoute(
        method=definition.method,
        path=definition.path_template,
        segments=segments,
        action=definition.action,
        order=definition.order,
        matcher=compile_segments(segments),
        line=line,
    )


def load(source: str, prefix: str = "") -> RouteTable:
    """Build a ``RouteTable`` from the full text of a route file.

    *prefix* (the servlet prefix) is prepended to every path template.
    Raises ``RouteFileError`` for the first invalid line, chained to the
    underlying ``PatternError`` or ``ActionSyntaxError`` where there is one.
    """
    routes: list[CompiledRoute] = []
    for lineno, raw in enumerate(source.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_MARKER):
            continue
        try:
            definition = parse_line(line, order=len(routes), prefix=prefix)
            routes.append(compile_route(definition, line=lineno))
        except RouteFileError as exc:
            raise RouteFileError(exc.reason, line=lineno, text=line) from exc
        except (PatternError, ActionSyntaxError) as exc:
            raise RouteFileError(str(exc), line=lineno, text=line) from exc

    shadowed = find_shadowed(routes)
    for record in shadowed:
        logger.warning("Unreachable route: %s", record)

    logger.info("Loaded %d routes (prefix=%r)", len(routes), prefix)
    return RouteTable(routes=tuple(routes), prefix=prefix, shadowed=tuple(shadowed))


def load_file(path: str | Path, prefix: str = "", encoding: str = "utf-8") -> RouteTable:
    """Read a route file from disk and ``load`` it.

    An unreadable file raises ``RouteFileError`` chained to the ``OSError``.
    """
    try:
        source = Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read route file {str(path)!r}: {exc}"
        raise RouteFileError(msg) from exc
    logger.debug("Read route file %s", path)
    return load(source, prefix=prefix)


# -- Shadow lint --


def _segment_covers(earlier: PathSegment, later: PathSegment) -> bool:
    """Whether every value *later* accepts is also accepted by *earlier*."""
    if not earlier.is_param:
        return not later.is_param and earlier.value == later.value
    if earlier.constraint is None or earlier.constraint == DEFAULT_CONSTRAINT:
        return True
    if later.is_param:
        return later.constraint == earlier.constraint
    return re.fullmatch(earlier.constraint, later.value) is not None


def _covers(earlier: CompiledRoute, later: CompiledRoute) -> bool:
    if earlier.method != ANY_METHOD and earlier.method != later.method:
        return False
    if len(earlier.segments) != len(later.segments):
        return False
    return all(_segment_covers(e, s) for e, s in zip(earlier.segments, later.segments, strict=True))


def find_shadowed(routes: list[CompiledRoute] | tuple[CompiledRoute, ...]) -> list[ShadowedRoute]:
    """Find routes that can never match because an earlier route always wins.

    Conservative: only reports shadowing that holds for every path, so a
    route partially overlapped by an earlier one is not flagged.
    """
    found: list[ShadowedRoute] = []
    for i, later in enumerate(routes):
        for earlier in routes[:i]:
            if _covers(earlier, later):
                found.append(ShadowedRoute(route=later, shadowed_by=earlier))
                break
    return found
