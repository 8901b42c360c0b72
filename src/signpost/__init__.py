"""Signpost — a file-backed HTTP redirect resolver.

``GET /<key>`` answers with a redirect to the URL stored in the file
``<data_dir>/<key>``. Mapping files are read fresh on every request, so
they can be edited, added, or removed while the server runs.

Basic usage::

    from signpost import Resolver, ResolverConfig

    app = Resolver(ResolverConfig(data_dir="links"))
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "InvalidMethod",
    "InvalidPath",
    "LookupFailed",
    "LookupFailure",
    "MappingStore",
    "NotFound",
    "RedirectKey",
    "Request",
    "Resolver",
    "ResolverConfig",
    "Response",
    "SignpostError",
    "TargetURL",
    "parse_key",
    "parse_target_url",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import signpost`` fast while providing a clean top-level API.
    """
    if name == "Resolver":
        from signpost.app import Resolver

        return Resolver

    if name == "ResolverConfig":
        from signpost.config import ResolverConfig

        return ResolverConfig

    if name == "MappingStore":
        from signpost.lookup import MappingStore

        return MappingStore

    if name in ("RedirectKey", "parse_key"):
        from signpost import keys as _keys

        return getattr(_keys, name)

    if name in ("TargetURL", "parse_target_url"):
        from signpost import urls as _urls

        return getattr(_urls, name)

    if name == "Request":
        from signpost.http.request import Request

        return Request

    if name == "Response":
        from signpost.http.response import Response

        return Response

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InvalidMethod",
        "InvalidPath",
        "LookupFailed",
        "LookupFailure",
        "NotFound",
        "SignpostError",
    ):
        from signpost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
