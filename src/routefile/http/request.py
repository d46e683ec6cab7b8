"""Immutable HTTP request handed to actions by the ASGI adapter."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import parse_qsl

from routefile._internal.asgi import Scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` and ``static_args`` are filled in once a route has
    matched; before that they are empty.
    """

    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    path_params: Mapping[str, str] = field(default_factory=dict)
    static_args: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_asgi(cls, scope: Scope) -> "Request":
        """Build a Request from an ASGI ``http`` scope.

        Header names are lower-cased; for repeated headers and query keys
        the last value wins.
        """
        headers = {
            name.decode("latin-1").lower(): value.decode("latin-1")
            for name, value in scope.get("headers", ())
        }
        query_string = scope.get("query_string", b"").decode("latin-1")
        return cls(
            method=scope["method"],
            path=scope["path"],
            query=dict(parse_qsl(query_string, keep_blank_values=True)),
            headers=headers,
        )
