"""Immutable HTTP request.

Only what the redirect pipeline reads: the method and the path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the undecoded request path as it arrived on the wire.
    Servers percent-decode ``scope["path"]``, so ``from_asgi`` prefers
    ``scope["raw_path"]`` when the server provides it.
    """

    method: str
    path: str

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI scope."""
        raw_path = scope.get("raw_path")
        if raw_path:
            # Some servers leave the query string on raw_path
            path = raw_path.decode("latin-1").split("?", 1)[0]
        else:
            path = scope["path"]
        return cls(method=scope["method"], path=path)
