"""File-backed key lookup.

Each key names a file directly inside the data directory. The file's
trimmed text is the redirect target. Nothing is cached: every lookup
checks the file, reads it, and parses it again, so mapping files may be
replaced at any time without telling the server.

Blocking filesystem calls run in an anyio worker thread so a slow disk
never stalls the event loop, and the read is bounded by a timeout.
"""

import logging
import stat
from collections.abc import Callable
from pathlib import Path
from typing import Any

import anyio

from signpost.errors import LookupFailed, LookupFailure, MalformedURL
from signpost.keys import RedirectKey
from signpost.urls import TargetURL, parse_target_url

logger = logging.getLogger("signpost.lookup")


def _read_if_file(path: Path) -> bytes | None:
    """Contents of *path*, or None when it is not a regular file.

    Errors other than "no such file" (name too long, permission denied
    on the directory) propagate as ``OSError``.
    """
    # Path.is_file() maps every OSError to False, hiding ENAMETOOLONG
    try:
        st = path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return None
    if not stat.S_ISREG(st.st_mode):
        return None
    return path.read_bytes()


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    """Run blocking call in anyio worker thread. Wrapper for ty compatibility."""
    return anyio.to_thread.run_sync(func, *args, abandon_on_cancel=True)  # type: ignore[union-attr]


class MappingStore:
    """Read-only view of a directory of mapping files.

    Holds no per-request state and is safe to share between concurrent
    requests.

    Usage::

        store = MappingStore("data", read_timeout=5.0)
        target = await store.resolve(RedirectKey("docs"))
    """

    __slots__ = ("_directory", "_read_timeout")

    def __init__(self, directory: str | Path, *, read_timeout: float | None = 5.0) -> None:
        self._directory = Path(directory)
        self._read_timeout = read_timeout

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: RedirectKey) -> Path:
        """Location of the mapping file for *key*.

        Plain join: ``RedirectKey`` cannot contain a separator or ``..``.
        """
        return self._directory / key.value

    async def resolve(self, key: RedirectKey) -> TargetURL:
        """Resolve *key* to its target URL.

        Raises:
            LookupFailed: With the specific cause: no regular file,
                read error or timeout, content not UTF-8, or content not
                an absolute URL.
        """
        path = self.path_for(key)

        try:
            with anyio.fail_after(self._read_timeout):
                raw = await _run_sync(_read_if_file, path)
        except TimeoutError as exc:
            logger.warning("Timed out reading mapping file %s", path)
            raise LookupFailed(key.value, LookupFailure.UNREADABLE, "read timed out") from exc
        except OSError as exc:
            logger.warning("Cannot read mapping file %s: %s", path, exc)
            raise LookupFailed(key.value, LookupFailure.UNREADABLE, str(exc)) from exc

        if raw is None:
            raise LookupFailed(key.value, LookupFailure.MISSING)

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LookupFailed(key.value, LookupFailure.UNDECODABLE, str(exc)) from exc

        try:
            return parse_target_url(text.strip())
        except MalformedURL as exc:
            raise LookupFailed(key.value, LookupFailure.MALFORMED, str(exc)) from exc
