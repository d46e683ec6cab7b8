"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Dispatcher configuration. Immutable after creation.

    Override what you need::

        config = RouterConfig(route_file="conf/routes", servlet_prefix="/api")
    """

    # Route file
    route_file: str | Path = "routes.conf"
    servlet_prefix: str = ""  # Prepended to every path template
    encoding: str = "utf-8"

    # Refuse to start when a route points at an unregistered action
    strict_actions: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
