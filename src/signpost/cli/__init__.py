"""Signpost CLI — starts the redirect server.

Entry point registered as ``signpost`` in ``pyproject.toml``::

    [project.scripts]
    signpost = "signpost.cli:main"

All settings come from the environment (and an optional ``.env`` file
in the working directory); see ``ResolverConfig.from_env``.
"""

import argparse
import logging
import sys

from signpost.config import ResolverConfig
from signpost.errors import ConfigurationError

logger = logging.getLogger("signpost.server")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``signpost`` command."""
    parser = argparse.ArgumentParser(
        prog="signpost",
        description=(
            "Signpost — redirect GET /<key> to the URL stored in <DATA_DIR>/<key>. "
            "Configured through DATA_DIR, LISTEN_ADDR, READ_TIMEOUT, "
            "REDIRECT_STATUS, WORKERS and LOG_LEVEL."
        ),
    )
    parser.parse_args(argv)

    try:
        config = ResolverConfig.from_env()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logging.basicConfig(level=config.log_level.upper(), format=_LOG_FORMAT)

    from signpost.app import Resolver

    app = Resolver(config)
    logger.info("Listening on %s", config.listen_addr)
    try:
        app.run()
    except OSError as exc:
        print(f"Error: cannot listen on {config.listen_addr}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
