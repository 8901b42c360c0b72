"""Redirect key extraction and validation.

A key is one or more runs of ``[A-Za-z0-9_]`` joined by a single ``-``
or ``.``. The pattern alone keeps keys inside the data directory: there
is no way to spell ``/``, ``..``, or a leading dot.
"""

import re
from dataclasses import dataclass

from signpost.errors import InvalidPath

# Compiled once, shared by every request handler.
KEY_PATTERN: re.Pattern[str] = re.compile(r"[A-Za-z0-9_]+(?:[-.][A-Za-z0-9_]+)*")


@dataclass(frozen=True, slots=True)
class RedirectKey:
    """A validated redirect key. Also the mapping file's name."""

    value: str

    def __str__(self) -> str:
        return self.value


def is_valid_key(candidate: str) -> bool:
    """Whether *candidate* matches the key syntax in full."""
    return KEY_PATTERN.fullmatch(candidate) is not None


def parse_key(path: str) -> RedirectKey:
    """Extract a ``RedirectKey`` from a request path.

    Strips exactly one leading ``/`` and validates the rest. Case is
    preserved and nothing is decoded or normalized.

    Raises:
        InvalidPath: If the remainder is not a valid key.
    """
    candidate = path[1:] if path.startswith("/") else path
    if not is_valid_key(candidate):
        raise InvalidPath()
    return RedirectKey(candidate)
