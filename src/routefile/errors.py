"""routefile exception hierarchy.

Shared across the loader, router, dispatcher, and ASGI adapter so every
module raises and catches the same types.

A request that matches no route is *not* an exception here: the router
returns a ``NoRouteFound`` value instead. ``NotFound`` exists only for the
ASGI layer, which turns it into a 404 response.
"""

from dataclasses import dataclass


class RouteFileBaseError(Exception):
    """Base for all routefile-specific errors."""


class ConfigurationError(RouteFileBaseError):
    """Raised when configuration or registry setup is invalid.

    Typically raised at startup, before any request is served.
    """


class PatternError(RouteFileBaseError):
    """A path template could not be compiled."""


class ActionSyntaxError(RouteFileBaseError):
    """An action reference like ``Controller.method(k:'v')`` is malformed."""


class RouteFileError(RouteFileBaseError):
    """Fatal load-time error. No part of the route table is usable.

    ``line`` is the 1-based line number in the source (``None`` when the
    source itself could not be read), ``text`` the offending line.
    """

    def __init__(self, reason: str, *, line: int | None = None, text: str = "") -> None:
        self.reason = reason
        self.line = line
        self.text = text
        if line is None:
            super().__init__(reason)
        else:
            super().__init__(f"routes:{line}: {reason}")


class ReverseError(RouteFileBaseError):
    """No route can produce a URL for the given action and params."""


class ActionNotFound(RouteFileBaseError):  # noqa: N818
    """A route's action has no registered callable."""


@dataclass(frozen=True, slots=True)
class HTTPError(RouteFileBaseError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers or the ASGI adapter; rendered as a plain-text
    response with ``status``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
