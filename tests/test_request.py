"""Tests for signpost.http.request — Request built from ASGI scopes."""

from typing import Any

import pytest

from signpost.http.request import Request


def _scope(**overrides: Any) -> dict[str, Any]:
    scope: dict[str, Any] = {
        "type": "http",
        "method": "GET",
        "path": "/docs",
        "raw_path": b"/docs",
    }
    scope.update(overrides)
    return scope


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        request = Request.from_asgi(_scope())
        assert request.method == "GET"
        assert request.path == "/docs"

    def test_prefers_undecoded_raw_path(self) -> None:
        request = Request.from_asgi(_scope(path="/a/b", raw_path=b"/a%2Fb"))
        assert request.path == "/a%2Fb"

    def test_raw_path_query_string_dropped(self) -> None:
        request = Request.from_asgi(_scope(raw_path=b"/docs?x=1"))
        assert request.path == "/docs"

    def test_falls_back_to_path(self) -> None:
        scope = _scope(path="/docs")
        del scope["raw_path"]
        assert Request.from_asgi(scope).path == "/docs"

    def test_none_raw_path_falls_back(self) -> None:
        assert Request.from_asgi(_scope(raw_path=None)).path == "/docs"

    def test_frozen(self) -> None:
        request = Request.from_asgi(_scope())
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]
