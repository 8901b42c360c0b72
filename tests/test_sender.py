"""Tests for signpost.server.sender response emission rules."""

import pytest

from signpost.http.response import Response
from signpost.server.sender import send_response


class TestSendResponse:
    @pytest.mark.asyncio
    async def test_start_then_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response('{"error":"not found"}', status=404), send)

        assert [m["type"] for m in messages] == ["http.response.start", "http.response.body"]
        assert messages[0]["status"] == 404
        assert messages[1]["body"] == b'{"error":"not found"}'

    @pytest.mark.asyncio
    async def test_headers_lowercased_with_content_length(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        response = Response("{}", status=301).with_header("Location", "https://example.com/")
        await send_response(response, send)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"application/json"
        assert headers[b"location"] == b"https://example.com/"
        assert headers[b"content-length"] == b"2"
