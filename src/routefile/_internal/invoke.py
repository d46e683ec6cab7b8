"""Invoke helper — call sync or async actions uniformly.

Registered actions can be ``def`` or ``async def``. This keeps the
sync/async check in one place::

    result = await invoke(action, **kwargs)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
