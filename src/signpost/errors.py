"""Signpost exception hierarchy.

Shared across the key parser, the mapping store, and the request handler
so every module raises and catches the same types.
"""

from dataclasses import dataclass
from enum import Enum


class SignpostError(Exception):
    """Base for all signpost-specific errors."""


class ConfigurationError(SignpostError):
    """Raised when resolver configuration is invalid.

    Typically raised by ``ResolverConfig.from_env()`` at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SignpostError):
    """An error that maps directly to an HTTP status code.

    ``detail`` is the short, machine-stable string sent to the client
    in the ``error`` field of the JSON body.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class InvalidMethod(HTTPError):
    """405 — only GET is served."""

    def __init__(self) -> None:
        super().__init__(status=405, detail="invalid method")


class InvalidPath(HTTPError):
    """400 — the request path is not a valid redirect key."""

    def __init__(self) -> None:
        super().__init__(status=400, detail="invalid path")


class NotFound(HTTPError):  # noqa: N818
    """404 — the key does not resolve to a usable target URL."""

    def __init__(self) -> None:
        super().__init__(status=404, detail="not found")


class LookupFailure(Enum):
    """Why a mapping lookup failed. Never shown to clients."""

    MISSING = "missing"
    UNREADABLE = "unreadable"
    UNDECODABLE = "undecodable"
    MALFORMED = "malformed"


class LookupFailed(SignpostError):
    """A key could not be resolved to a target URL.

    Carries the internal cause for logging. The request handler turns
    every instance into the same ``NotFound`` response.
    """

    def __init__(self, key: str, reason: LookupFailure, detail: str = "") -> None:
        self.key = key
        self.reason = reason
        self.detail = detail
        message = f"{key}: {reason.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MalformedURL(ValueError):
    """Mapping file content is not a well-formed absolute URL."""
