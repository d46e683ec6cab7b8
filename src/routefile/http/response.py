"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response.
"""

import json as json_module
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8")

    @classmethod
    def json(cls, data: Any, status: int = 200) -> "Response":
        return cls(
            body=json_module.dumps(data),
            status=status,
            content_type="application/json",
        )


def to_response(result: Any) -> Response:
    """Turn an action's return value into a Response.

    ``Response`` passes through, ``None`` is an empty 204, ``str`` and
    ``bytes`` are plain bodies, ``dict`` and ``list`` are JSON.
    """
    if isinstance(result, Response):
        return result
    if result is None:
        return Response(status=204)
    if isinstance(result, (str, bytes)):
        return Response(body=result)
    if isinstance(result, (dict, list)):
        return Response.json(result)
    msg = f"Cannot convert {type(result).__name__} to a Response"
    raise TypeError(msg)
