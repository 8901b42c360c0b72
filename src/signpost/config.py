"""Resolver configuration.

ResolverConfig is a frozen dataclass — immutable after creation, built
once at startup, and passed by parameter to the server and the mapping
store. Nothing reads the environment mid-request.
"""

import ipaddress
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from signpost.errors import ConfigurationError

logger = logging.getLogger("signpost.config")

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Resolver configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ResolverConfig(data_dir="/srv/links", port=9000)
    """

    # Mapping files
    data_dir: str | Path = "data"
    read_timeout: float | None = 5.0  # None disables the bound

    # Server
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    workers: int = 1  # 0 = auto-detect from CPU count

    # Responses
    redirect_status: int = 301

    # Logging
    log_level: str = "info"

    def __post_init__(self) -> None:
        if self.redirect_status not in REDIRECT_STATUSES:
            allowed = ", ".join(str(s) for s in sorted(REDIRECT_STATUSES))
            msg = f"redirect_status must be one of {allowed}, got {self.redirect_status}"
            raise ConfigurationError(msg)
        if self.read_timeout is not None and self.read_timeout <= 0:
            msg = f"read_timeout must be positive, got {self.read_timeout}"
            raise ConfigurationError(msg)
        if self.workers < 0:
            msg = f"workers must be 0 (auto) or more, got {self.workers}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            raise ConfigurationError(msg)

    @property
    def listen_addr(self) -> str:
        """``host:port`` form of the bind address."""
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        env_file: str | Path | None = ".env",
    ) -> "ResolverConfig":
        """Build a config from environment variables.

        Loads *env_file* first when it exists; variables already set in
        the process environment win. Pass ``env_file=None`` to skip it.
        When *environ* is given it is used as-is and ``.env`` is not
        consulted.

        Variables: ``DATA_DIR``, ``LISTEN_ADDR``, ``READ_TIMEOUT``,
        ``REDIRECT_STATUS``, ``WORKERS``, ``LOG_LEVEL``.

        Raises:
            ConfigurationError: If a numeric variable does not parse or a
                value is out of range. A malformed ``LISTEN_ADDR`` is not
                an error; it falls back to ``127.0.0.1:8080``.
        """
        if environ is None:
            if env_file is not None:
                load_dotenv(env_file, override=False)
            environ = os.environ

        host, port = parse_listen_addr(environ.get("LISTEN_ADDR", ""))
        return cls(
            data_dir=environ.get("DATA_DIR") or "data",
            read_timeout=_float_var(environ, "READ_TIMEOUT", 5.0),
            host=host,
            port=port,
            workers=_int_var(environ, "WORKERS", 1),
            redirect_status=_int_var(environ, "REDIRECT_STATUS", 301),
            log_level=environ.get("LOG_LEVEL") or "info",
        )


def parse_listen_addr(value: str) -> tuple[str, int]:
    """Parse an ``ip:port`` socket address.

    IPv6 addresses are written in brackets (``[::1]:8080``). Host names
    are not accepted. Anything unparsable yields the default
    ``127.0.0.1:8080``.
    """
    if not value:
        return DEFAULT_HOST, DEFAULT_PORT

    host_part, sep, port_part = value.rpartition(":")
    try:
        if not sep or not port_part.isdigit():
            raise ValueError(value)
        port = int(port_part)
        if port > 65535:
            raise ValueError(value)
        if host_part.startswith("[") and host_part.endswith("]"):
            address = ipaddress.IPv6Address(host_part[1:-1])
        else:
            address = ipaddress.IPv4Address(host_part)
    except ValueError:
        logger.warning(
            "Invalid LISTEN_ADDR %r, falling back to %s:%d", value, DEFAULT_HOST, DEFAULT_PORT
        )
        return DEFAULT_HOST, DEFAULT_PORT
    return str(address), port


def _int_var(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigurationError(msg) from exc


def _float_var(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        msg = f"{name} must be a number, got {raw!r}"
        raise ConfigurationError(msg) from exc
