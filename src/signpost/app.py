"""Signpost application class.

An ASGI 3.0 callable. Configuration is fixed at construction; the app
holds no mutable state, so one instance serves every worker thread.
"""

import logging

from signpost._internal.asgi import Receive, Scope, Send
from signpost.config import ResolverConfig
from signpost.lookup import MappingStore
from signpost.server.handler import handle_request

logger = logging.getLogger("signpost.server")


class Resolver:
    """The redirect resolver application.

    Usage::

        from signpost import Resolver, ResolverConfig

        app = Resolver(ResolverConfig(data_dir="links"))
        app.run()

    Or hand ``app`` to any ASGI server.
    """

    __slots__ = ("_store", "config")

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self.config: ResolverConfig = config or ResolverConfig()
        self._store = MappingStore(self.config.data_dir, read_timeout=self.config.read_timeout)

    @property
    def store(self) -> MappingStore:
        return self._store

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the production server and serve until terminated.

        Args:
            host: Override bind host.
            port: Override bind port.

        Raises:
            OSError: If the listening socket cannot be bound.
        """
        from signpost.server.production import run_production_server

        run_production_server(
            self,
            host=host if host is not None else self.config.host,
            port=port if port is not None else self.config.port,
            workers=self.config.workers,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly, then delegates HTTP scopes
        to the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            store=self._store,
            redirect_status=self.config.redirect_status,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        There is nothing to set up; startup only reports where mappings
        are read from, and warns when that directory is missing.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                directory = self._store.directory
                if not directory.is_dir():
                    logger.warning(
                        "Data directory %s does not exist; every key will resolve to 404",
                        directory,
                    )
                logger.info("Serving redirects from %s", directory)
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
