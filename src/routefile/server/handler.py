"""ASGI handler — translates ASGI scopes to Requests and routes them.

The only component that touches raw ASGI. It asks the dispatcher for a
route, calls the registered action, and sends the result back through
``send()``. A routing miss becomes a 404; it never reaches the action
layer as an exception.
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from routefile._internal.asgi import Receive, Scope, Send
from routefile._internal.invoke import invoke
from routefile.dispatch.dispatcher import Dispatcher
from routefile.errors import HTTPError, NotFound
from routefile.http.request import Request
from routefile.http.response import Response, to_response
from routefile.routing.route import RouteMatch
from routefile.server.sender import send_response

logger = logging.getLogger("routefile.server")

_CONVERTIBLE = (int, float, str)


class RouterApp:
    """ASGI application serving a ``Dispatcher``.

    Usage::

        registry = ActionRegistry()

        @registry.action("PageController.show")
        def show(id: str) -> str:
            return f"page {id}"

        app = RouterApp(Dispatcher.from_config(RouterConfig(), registry))
    """

    __slots__ = ("debug", "dispatcher")

    def __init__(self, dispatcher: Dispatcher, *, debug: bool = False) -> None:
        self.dispatcher = dispatcher
        self.debug = debug

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        try:
            response = await self.handle(request)
        except HTTPError as exc:
            response = handle_http_error(exc, request, debug=self.debug)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            response = Response(body="Internal Server Error", status=500)
        await send_response(response, send)

    async def handle(self, request: Request) -> Response:
        """Route *request* and call its action. Raises ``NotFound`` on a miss."""
        result = self.dispatcher.route(request.method, request.path)
        if not isinstance(result, RouteMatch):
            raise NotFound(f"No route matches {request.method} {request.path!r}")

        # ActionNotFound falls through to the 500 handler in __call__
        action = self.dispatcher.registry.resolve(result.action)
        request = replace(
            request,
            path_params=result.path_params,
            static_args=dict(result.action.static_args),
        )
        kwargs = build_action_kwargs(action, request, result.path_params, result.action.static_args)
        return to_response(await invoke(action, **kwargs))


def build_action_kwargs(
    action: Callable[..., Any],
    request: Request,
    path_params: Mapping[str, str],
    static_args: Mapping[str, str],
) -> dict[str, Any]:
    """Inspect the action signature and build kwargs.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, converted to ``int``/``float`` when annotated)
    3. Static arguments from the route line (same conversion)

    A ``**kwargs`` parameter receives every path param and static arg not
    already bound.
    """
    sig = inspect.signature(action, eval_str=True)
    values = {**static_args, **path_params}
    kwargs: dict[str, Any] = {}
    accepts_extra = False

    for name, param in sig.parameters.items():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            accepts_extra = True
        elif name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in values:
            kwargs[name] = _convert(values[name], param.annotation)

    if accepts_extra:
        for name, value in values.items():
            kwargs.setdefault(name, value)
    return kwargs


def _convert(value: str, annotation: Any) -> Any:
    if annotation in _CONVERTIBLE:
        try:
            return annotation(value)
        except ValueError:
            return value
    return value


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool = False) -> Response:
    """Map an HTTPError to a plain-text Response."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"
    resp = Response(body=detail).with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
