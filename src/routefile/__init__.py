"""routefile — Play-style route files for Python web apps.

Declare routes in a text file, load them once into an immutable table,
and resolve requests with first-match-wins semantics.

Basic usage::

    from routefile import load

    table = load('''
    GET     /page/home                  PageController.showPage(id:'home')
    GET     /page/{id}                  PageController.showPage
    POST    /customer/{<[0-9]+>id}      CustomerController.create
    ''')

    result = table.match("GET", "/page/about")
    if result:
        result.route.action.reference  # "PageController.showPage"
        result.path_params             # {"id": "about"}

Serving (``pip install routefile[server]``)::

    from routefile import ActionRegistry, Dispatcher, RouterApp, RouterConfig

    registry = ActionRegistry()
    app = RouterApp(Dispatcher.from_config(RouterConfig(route_file="routes.conf"), registry))
"""

__version__ = "0.1.0"
__all__ = [
    "ActionDescriptor",
    "ActionNotFound",
    "ActionRegistry",
    "CompiledRoute",
    "ConfigurationError",
    "Dispatcher",
    "MatchResult",
    "NoRouteFound",
    "PathSegment",
    "Request",
    "Response",
    "RouteFileError",
    "RouteMatch",
    "RouteTable",
    "RouterApp",
    "RouterConfig",
    "load",
    "load_file",
    "match",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routefile`` fast while providing a clean top-level API.
    """
    if name in ("load", "load_file"):
        from routefile.routing import loader as _loader

        return getattr(_loader, name)

    if name in ("RouteTable", "match"):
        from routefile.routing import router as _router

        return getattr(_router, name)

    if name in (
        "ActionDescriptor",
        "CompiledRoute",
        "MatchResult",
        "NoRouteFound",
        "PathSegment",
        "RouteMatch",
    ):
        from routefile.routing import route as _route

        return getattr(_route, name)

    if name == "RouterConfig":
        from routefile.config import RouterConfig

        return RouterConfig

    if name == "ActionRegistry":
        from routefile.dispatch.registry import ActionRegistry

        return ActionRegistry

    if name == "Dispatcher":
        from routefile.dispatch.dispatcher import Dispatcher

        return Dispatcher

    if name == "RouterApp":
        from routefile.server.handler import RouterApp

        return RouterApp

    if name == "Request":
        from routefile.http.request import Request

        return Request

    if name == "Response":
        from routefile.http.response import Response

        return Response

    if name in ("ActionNotFound", "ConfigurationError", "RouteFileError"):
        from routefile import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
