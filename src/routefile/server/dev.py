"""Serve a RouterApp with the pounce ASGI server.

pounce is an optional dependency (``pip install routefile[server]``),
imported only when a server is actually started.
"""

from routefile.errors import ConfigurationError


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a single-worker pounce server for *app*.

    Args:
        app: ASGI callable (usually a ``RouterApp``).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on source changes.
        app_path: Optional ``"module:attribute"`` import string so pounce
            can re-import the app on reload.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires the 'pounce' server. Install it with: pip install routefile[server]"
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
