"""App import resolution — resolves ``"module:attribute"`` strings to RouterApp instances."""

import importlib

from routefile.server.handler import RouterApp


def resolve_app(import_string: str) -> RouterApp:
    """Resolve an import string to a ``RouterApp``.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"app"``. A callable that is not already a ``RouterApp``
    is treated as a factory and called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``RouterApp``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, RouterApp):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, RouterApp):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a RouterApp instance"
        raise TypeError(msg)

    return obj
