"""Absolute URL parsing for mapping file contents.

Mapping files hold free-form text. Only text that reads as a single
absolute URL becomes a redirect target; everything else is rejected
with ``MalformedURL``. Parsing follows the WHATWG URL rules browsers
apply to a ``Location`` header: for http(s), ws(s) and ftp a ``\\``
counts as ``/`` and the slashes after the scheme are optional, dot
segments are resolved, and tabs and newlines are dropped.

Usage::

    from signpost.urls import parse_target_url

    target = parse_target_url("HTTPS://Example.com/a/../b")
    str(target)  # "https://example.com/b"
"""

import ipaddress
import re
from dataclasses import dataclass
from urllib.parse import quote, urlsplit

from signpost.errors import MalformedURL

# Schemes that always carry a host, with their default ports.
SPECIAL_SCHEMES: dict[str, int] = {
    "ftp": 21,
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_TAB_OR_NEWLINE = re.compile(r"[\t\n\r]")
_FORBIDDEN_HOST = re.compile(r"[\x00-\x20\x7f#%/:<>?@\[\\\]^|]")

# Everything legal in a URL is left alone, including existing %-escapes.
_URL_SAFE = "!#$%&'()*+,/:;=?@[]~-._"

_SINGLE_DOT = frozenset({".", "%2e"})
_DOUBLE_DOT = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})


@dataclass(frozen=True, slots=True)
class TargetURL:
    """A parsed absolute URL in canonical form.

    ``str(url)`` gives the canonical string used for the ``Location``
    header and the JSON body.
    """

    scheme: str
    host: str | None
    href: str

    def __str__(self) -> str:
        return self.href


def _encode(component: str) -> str:
    return quote(component, safe=_URL_SAFE)


def _canonical_host(hostname: str) -> str:
    if ":" in hostname:
        try:
            return f"[{ipaddress.IPv6Address(hostname).compressed}]"
        except ValueError as exc:
            raise MalformedURL(f"invalid IPv6 host: {hostname!r}") from exc
    if _FORBIDDEN_HOST.search(hostname):
        raise MalformedURL(f"forbidden character in host: {hostname!r}")
    if hostname.isascii():
        return hostname
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise MalformedURL(f"invalid host: {hostname!r}") from exc


def _remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments of an absolute path."""
    if not path.startswith("/"):
        return path
    segments = path[1:].split("/")
    output: list[str] = []
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in _SINGLE_DOT:
            if last:
                output.append("")
        elif lowered in _DOUBLE_DOT:
            if output:
                output.pop()
            if last:
                output.append("")
        else:
            output.append(segment)
    return "/" + "/".join(output)


def _normalize_special(rest: str) -> str:
    """Rewrite the part after ``scheme:`` of a special-scheme URL.

    Backslashes before the query become slashes, and however many
    slashes follow the scheme, exactly two remain.
    """
    cut = min((i for i in (rest.find("?"), rest.find("#")) if i != -1), default=len(rest))
    head = rest[:cut].replace("\\", "/")
    return "//" + head.lstrip("/") + rest[cut:]


def parse_target_url(text: str) -> TargetURL:
    """Parse *text* as an absolute URL.

    The scheme and host are lower-cased, an internationalised host is
    IDNA-encoded, default ports of well-known schemes are dropped, an
    empty path on those schemes becomes ``/``, dot segments are
    resolved, and characters that are not legal in a URL (spaces,
    controls, non-ASCII, ``"<>`{}|\\^``) are percent-encoded.

    Raises:
        MalformedURL: If *text* is empty, has no scheme, has an invalid
            port or host, or is missing a host its scheme requires.
    """
    text = _TAB_OR_NEWLINE.sub("", text)
    if not text:
        raise MalformedURL("empty")

    match = _SCHEME.match(text)
    if match is None or text[match.end() : match.end() + 1] != ":":
        raise MalformedURL("relative reference")
    scheme = match.group().lower()
    special = scheme in SPECIAL_SCHEMES

    rest = text[match.end() + 1 :]
    if special:
        rest = _normalize_special(rest)
    normalized = f"{scheme}:{rest}"

    try:
        parts = urlsplit(normalized)
        port = parts.port
    except ValueError as exc:
        raise MalformedURL(str(exc)) from exc

    has_authority = rest.startswith("//")
    hostname = parts.hostname or ""
    if special and not hostname:
        raise MalformedURL(f"{scheme} URL without host")

    authority = ""
    if has_authority:
        userinfo, _, _ = parts.netloc.rpartition("@")
        authority = _canonical_host(hostname) if hostname else ""
        if port is not None and port != SPECIAL_SCHEMES.get(scheme):
            authority = f"{authority}:{port}"
        if userinfo:
            authority = f"{_encode(userinfo)}@{authority}"

    path = _remove_dot_segments(parts.path)
    if special and not path:
        path = "/"

    href = f"{scheme}:"
    if has_authority:
        href += f"//{authority}"
    href += _encode(path)

    before_fragment, has_fragment, _ = normalized.partition("#")
    if "?" in before_fragment:
        href += "?" + _encode(parts.query)
    if has_fragment:
        href += "#" + _encode(parts.fragment)

    return TargetURL(scheme=scheme, host=hostname or None, href=href)
