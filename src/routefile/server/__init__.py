"""ASGI adapter — serves a ``Dispatcher`` over HTTP."""
