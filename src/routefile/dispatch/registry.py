"""Action registry — explicit ``(controller, method) -> callable`` mapping.

Populated at startup, looked up by the dispatcher for every matched
route::

    registry = ActionRegistry()

    @registry.action("PageController.showPage")
    def show_page(id: str) -> str:
        return f"page {id}"

    registry.register_controller("CustomerController", CustomerController())
"""

from collections.abc import Callable, Iterator
from typing import Any

from routefile.errors import ActionNotFound, ConfigurationError
from routefile.routing.route import ActionDescriptor

Action = Callable[..., Any]


def _split_reference(reference: str) -> tuple[str, str]:
    target, _, method_name = reference.rpartition(".")
    if not target or not method_name:
        msg = f"Action reference must look like 'Controller.method', got {reference!r}"
        raise ConfigurationError(msg)
    return target, method_name


class ActionRegistry:
    """Maps ``(target, method_name)`` pairs to callables."""

    __slots__ = ("_actions",)

    def __init__(self) -> None:
        self._actions: dict[tuple[str, str], Action] = {}

    def register(self, reference: str, fn: Action) -> None:
        """Register *fn* under ``"Controller.method"``.

        Raises ``ConfigurationError`` if the reference is malformed or
        already taken.
        """
        key = _split_reference(reference)
        if not callable(fn):
            msg = f"Action {reference!r} must be callable, got {type(fn).__name__}"
            raise ConfigurationError(msg)
        if key in self._actions:
            msg = f"Action {reference!r} is already registered"
            raise ConfigurationError(msg)
        self._actions[key] = fn

    def action(self, reference: str) -> Callable[[Action], Action]:
        """Decorator form of ``register``. Returns the function unchanged."""

        def decorator(fn: Action) -> Action:
            self.register(reference, fn)
            return fn

        return decorator

    def register_controller(self, target: str, controller: object) -> None:
        """Register every public callable attribute of *controller* under *target*."""
        for name in dir(controller):
            if name.startswith("_"):
                continue
            attr = getattr(controller, name)
            if callable(attr) and not isinstance(attr, type):
                self.register(f"{target}.{name}", attr)

    def resolve(self, action: ActionDescriptor) -> Action:
        """Return the callable for *action*. Raises ``ActionNotFound``."""
        try:
            return self._actions[(action.target, action.method_name)]
        except KeyError:
            msg = f"No action registered for {action.reference!r}"
            raise ActionNotFound(msg) from None

    def __contains__(self, action: object) -> bool:
        if isinstance(action, ActionDescriptor):
            return (action.target, action.method_name) in self._actions
        if isinstance(action, str):
            target, _, method_name = action.rpartition(".")
            return (target, method_name) in self._actions
        return False

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[str]:
        return (f"{target}.{method}" for target, method in self._actions)
