"""Production server.

Starts a pounce ASGI server with the live Resolver object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from signpost.app import Resolver


def run_production_server(
    app: Resolver,
    host: str = "127.0.0.1",
    port: int = 8080,
    workers: int = 1,
    *,
    log_level: str = "info",
) -> None:
    """Run the resolver under pounce until the process is terminated.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but we have a live ``Resolver`` object. We use ``pounce.Server``
    directly with the ASGI callable.

    Args:
        app: Resolver instance.
        host: Bind address.
        port: Bind port.
        workers: Worker count (0 = auto-detect from CPU count).
        log_level: Log level (debug, info, warning, error, critical).

    Raises:
        OSError: If the address cannot be bound (e.g. already in use).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level.lower(),
        # Every response is the resolver's own JSON
        health_check_path=None,
    )
    server = Server(config, app)
    server.run()
