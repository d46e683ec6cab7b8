"""Path pattern compiler.

Turns a path template such as ``/customer/{<[0-9]+>customerid}`` into an
ordered tuple of ``PathSegment`` and a single matcher callable.

Template syntax, one token per ``/``-separated part::

    users               static, compared by exact (case-sensitive) equality
    {id}                parameter, default constraint [^/]+
    {<[0-9]+>id}        parameter, constrained by an anchored regex

The constraint is the text between the first ``<`` and the last ``>``, so
it may itself contain ``>``, braces or slashes (``{<[0-9]{4}>year}``,
``{<[^/]+>name}``). Slashes inside braces do not split the template.
"""

import re

from routefile.errors import PatternError
from routefile.routing.route import DEFAULT_CONSTRAINT, Matcher, PathSegment

_PARAM_NAME = re.compile(r"\w+")


def split_path(path: str) -> tuple[str, ...]:
    """Split a path into its non-empty ``/``-separated parts.

    Leading, trailing, and doubled slashes are ignored, so ``/`` and the
    empty string both yield ``()``.
    """
    return tuple(part for part in path.split("/") if part)


def split_template(template: str) -> tuple[str, ...]:
    """Split a path template like ``split_path``, but keep ``/`` inside braces.

    ``/u/{<[^/]+>name}`` yields ``("u", "{<[^/]+>name}")``. A stray ``}``
    does not drive the depth below zero; ``_parse_token`` reports it.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in template:
        if ch == "/" and depth == 0:
            if current:
                parts.append("".join(current))
                current = []
            continue
        if ch == "{":
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
        current.append(ch)
    if current:
        parts.append("".join(current))
    return tuple(parts)


def join_prefix(prefix: str, template: str) -> str:
    """Prepend *prefix* to *template* with exactly one slash between them."""
    if not prefix:
        return template
    return "/" + "/".join(p for p in (prefix.strip("/"), template.strip("/")) if p)


def _parse_token(token: str, template: str) -> PathSegment:
    if "{" not in token and "}" not in token:
        return PathSegment(value=token)

    if not (token.startswith("{") and token.endswith("}")) or len(token) < 2:
        msg = f"Unbalanced braces in segment {token!r} of {template!r}"
        raise PatternError(msg)

    inner = token[1:-1]
    constraint: str | None = None
    if inner.startswith("<"):
        close = inner.rfind(">")
        if close <= 0:
            msg = f"Unterminated constraint in segment {token!r} of {template!r}"
            raise PatternError(msg)
        constraint = inner[1:close]
        name = inner[close + 1 :]
        if not constraint:
            msg = f"Empty constraint in segment {token!r} of {template!r}"
            raise PatternError(msg)
    else:
        name = inner
        if "{" in name or "}" in name:
            msg = f"Unbalanced braces in segment {token!r} of {template!r}"
            raise PatternError(msg)

    if not name:
        msg = f"Empty parameter name in segment {token!r} of {template!r}"
        raise PatternError(msg)
    if not _PARAM_NAME.fullmatch(name):
        msg = f"Invalid parameter name {name!r} in {template!r}"
        raise PatternError(msg)

    return PathSegment(value=token, is_param=True, param_name=name, constraint=constraint)


def parse_path(template: str) -> list[PathSegment]:
    """Parse a path template into segments.

    Examples::

        "/users"               -> [PathSegment("users")]
        "/users/{id}"          -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{<[0-9]+>id}"  -> [..., PathSegment(..., constraint="[0-9]+")]

    Raises ``PatternError`` on unbalanced braces, empty or invalid names,
    and names used twice in the same template.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in split_template(template):
        seg = _parse_token(part, template)
        if seg.is_param:
            assert seg.param_name is not None
            if seg.param_name in seen:
                msg = f"Duplicate parameter name {seg.param_name!r} in {template!r}"
                raise PatternError(msg)
            seen.add(seg.param_name)
        segments.append(seg)
    return segments


def compile_constraint(segment: PathSegment) -> re.Pattern[str]:
    """Compile a parameter segment's constraint. Raises ``PatternError`` if invalid."""
    try:
        return re.compile(segment.pattern)
    except (re.error, OverflowError, RecursionError) as exc:
        msg = f"Invalid constraint {segment.constraint!r} for parameter {segment.param_name!r}: {exc}"
        raise PatternError(msg) from exc


_DEFAULT_REGEX = re.compile(DEFAULT_CONSTRAINT)


def compile_segments(segments: list[PathSegment] | tuple[PathSegment, ...]) -> Matcher:
    """Build the matcher for a segment sequence.

    The returned callable takes the request's split path and returns the
    raw (still percent-encoded) parameter values in segment order, or
    ``None``. It checks the segment count first, then each segment in
    order, and stops at the first one that fails.
    """
    # (literal, None) for static parts, (None, regex) for parameters
    checks: list[tuple[str | None, re.Pattern[str] | None]] = []
    for seg in segments:
        if seg.is_param:
            regex = _DEFAULT_REGEX if seg.constraint is None else compile_constraint(seg)
            checks.append((None, regex))
        else:
            checks.append((seg.value, None))

    count = len(checks)
    frozen_checks = tuple(checks)

    def matcher(parts: tuple[str, ...]) -> tuple[str, ...] | None:
        if len(parts) != count:
            return None
        captured: list[str] = []
        for part, (literal, regex) in zip(parts, frozen_checks, strict=True):
            if regex is None:
                if part != literal:
                    return None
            elif regex.fullmatch(part) is None:
                return None
            else:
                captured.append(part)
        return tuple(captured)

    return matcher
