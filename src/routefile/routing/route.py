"""Route data model — frozen dataclasses shared by loader, router, and dispatcher."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

# Takes the request's path segments, returns raw captures in segment order or None.
Matcher: TypeAlias = Callable[[tuple[str, ...]], tuple[str, ...] | None]

DEFAULT_CONSTRAINT = r"[^/]+"

ANY_METHOD = "*"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a path template.

    Static:       ``/users``               (is_param=False)
    Param:        ``/{id}``                (is_param=True, param_name="id")
    Constrained:  ``/{<[0-9]+>id}``        (is_param=True, constraint="[0-9]+")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    constraint: str | None = None

    @property
    def pattern(self) -> str:
        """The regex a parameter segment must fully match."""
        return self.constraint if self.constraint is not None else DEFAULT_CONSTRAINT


@dataclass(frozen=True, slots=True)
class ActionDescriptor:
    """What a route points at: ``target.method_name`` plus static arguments.

    The router carries this through untouched. Resolving it to a callable
    is the dispatcher's job. Static arguments are stored as ``(key, value)``
    pairs in declaration order, so the descriptor is hashable and no
    caller can change them.
    """

    target: str
    method_name: str
    static_arg_items: tuple[tuple[str, str], ...] = ()

    @property
    def reference(self) -> str:
        return f"{self.target}.{self.method_name}"

    @property
    def static_args(self) -> Mapping[str, str]:
        """Read-only view of the static arguments."""
        return MappingProxyType(dict(self.static_arg_items))

    def __str__(self) -> str:
        if not self.static_arg_items:
            return self.reference
        args = ", ".join(f"{k}:'{v}'" for k, v in self.static_arg_items)
        return f"{self.reference}({args})"


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """One parsed route line, before its path is compiled."""

    method: str
    path_template: str
    action: ActionDescriptor
    order: int


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A route ready for matching. Owned by a ``RouteTable``; never mutated."""

    method: str
    path: str
    segments: tuple[PathSegment, ...]
    action: ActionDescriptor
    order: int
    matcher: Matcher = field(repr=False, compare=False)
    line: int | None = None

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.param_name for s in self.segments if s.is_param and s.param_name)

    def accepts_method(self, method: str) -> bool:
        return self.method == ANY_METHOD or self.method == method


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: CompiledRoute
    path_params: dict[str, str]
    raw_path: str
    raw_method: str

    @property
    def action(self) -> ActionDescriptor:
        return self.route.action

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class NoRouteFound:
    """No route accepted the request. A normal outcome, not an error.

    Carries the original method and path for diagnostics; callers decide
    the fallback (404 page, another handler chain, ...).
    """

    method: str
    path: str

    def __bool__(self) -> bool:
        return False


MatchResult: TypeAlias = RouteMatch | NoRouteFound


@dataclass(frozen=True, slots=True)
class ShadowedRoute:
    """Lint record: ``route`` can never match because ``shadowed_by`` wins first."""

    route: CompiledRoute
    shadowed_by: CompiledRoute

    def __str__(self) -> str:
        return (
            f"{self.route.method} {self.route.path} -> {self.route.action.reference} "
            f"(line {self.route.line}) is shadowed by "
            f"{self.shadowed_by.method} {self.shadowed_by.path} "
            f"(line {self.shadowed_by.line})"
        )
