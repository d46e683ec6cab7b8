"""Dispatcher — owns the live route table and pairs matches with actions.

The table is held by reference. ``reload()`` builds a complete new table
first and then replaces the reference in one assignment, so a concurrent
``route()`` call sees either the old table or the new one, never a mix.
Matching takes no lock; only reloads are serialised.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from routefile.config import RouterConfig
from routefile.dispatch.registry import Action, ActionRegistry
from routefile.errors import ConfigurationError
from routefile.routing.loader import load, load_file
from routefile.routing.route import CompiledRoute, MatchResult, RouteMatch
from routefile.routing.router import RouteTable

logger = logging.getLogger("routefile.dispatch")


def _unresolved(table: RouteTable, registry: ActionRegistry) -> list[CompiledRoute]:
    return [route for route in table if route.action not in registry]


def _check_actions(table: RouteTable, registry: ActionRegistry) -> None:
    missing = _unresolved(table, registry)
    if missing:
        refs = ", ".join(sorted({r.action.reference for r in missing}))
        msg = f"Routes point at unregistered actions: {refs}"
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class RouterHandler:
    """A matched route together with the callable it resolves to."""

    match: RouteMatch
    action: Action


class Dispatcher:
    """Routes requests against the current table and resolves actions.

    Usage::

        dispatcher = Dispatcher.from_config(RouterConfig(route_file="routes.conf"), registry)
        handler = dispatcher.resolve("GET", "/page/home")
        if handler is not None:
            handler.action(**handler.match.path_params)
    """

    __slots__ = ("_config", "_has_route_file", "_registry", "_reload_lock", "_table")

    def __init__(
        self,
        table: RouteTable,
        registry: ActionRegistry,
        *,
        config: RouterConfig | None = None,
    ) -> None:
        self._table = table
        self._registry = registry
        self._config = config or RouterConfig(servlet_prefix=table.prefix)
        self._has_route_file = config is not None
        self._reload_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: RouterConfig, registry: ActionRegistry) -> "Dispatcher":
        """Load ``config.route_file`` and build a dispatcher around it.

        Raises ``RouteFileError`` if the file cannot be loaded, and
        ``ConfigurationError`` when ``config.strict_actions`` is set and a
        route points at an unregistered action.
        """
        table = load_file(config.route_file, prefix=config.servlet_prefix, encoding=config.encoding)
        dispatcher = cls(table, registry, config=config)
        if config.strict_actions:
            dispatcher.check_actions()
        return dispatcher

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def registry(self) -> ActionRegistry:
        return self._registry

    @property
    def config(self) -> RouterConfig:
        return self._config

    def route(self, method: str, path: str) -> MatchResult:
        """Match against the current table, logging misses at DEBUG."""
        result = self._table.match(method, path)
        if not result:
            logger.debug("no route found for method[%s] and path[%s]", method, path)
        return result

    def resolve(self, method: str, path: str) -> RouterHandler | None:
        """Match and resolve the action. ``None`` when no route matches.

        Raises ``ActionNotFound`` if the route matched but its action was
        never registered.
        """
        result = self.route(method, path)
        if not isinstance(result, RouteMatch):
            return None
        return RouterHandler(match=result, action=self._registry.resolve(result.action))

    def unresolved(self) -> list[CompiledRoute]:
        """Routes in the current table whose action has no registered callable."""
        return _unresolved(self._table, self._registry)

    def check_actions(self) -> None:
        """Raise ``ConfigurationError`` listing every unregistered action."""
        _check_actions(self._table, self._registry)

    def reload(self, source: str | None = None) -> RouteTable:
        """Build a new table and publish it atomically.

        *source* is route file text; when omitted the configured route
        file is read again. On any error the current table stays in place
        and the error propagates.

        Raises ``ConfigurationError`` when *source* is omitted and the
        dispatcher was built without a ``RouterConfig``.
        """
        if source is None and not self._has_route_file:
            msg = "No route file configured; pass route source text to reload()"
            raise ConfigurationError(msg)
        with self._reload_lock:
            prefix = self._config.servlet_prefix
            if source is None:
                table = load_file(
                    Path(self._config.route_file), prefix=prefix, encoding=self._config.encoding
                )
            else:
                table = load(source, prefix=prefix)
            if self._config.strict_actions:
                _check_actions(table, self._registry)
            self._table = table
        logger.info("Route table reloaded: %d routes", len(table))
        return table
