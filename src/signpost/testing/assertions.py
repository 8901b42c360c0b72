"""Redirect and error assertion helpers for signpost tests.

Each assertion produces a clear error message on failure.
"""

import json as json_module
from typing import Any

from signpost.http.response import Response


def json_body(response: Response) -> Any:
    """Parse the response body as JSON."""
    return json_module.loads(response.text)


def assert_redirect(response: Response, url: str, *, status: int = 301) -> None:
    """Assert *response* redirects to *url* with the expected JSON body."""
    assert response.status == status, (
        f"Expected status {status}, got {response.status}. Body: {response.text[:500]}"
    )
    location = response.header("location")
    assert location == url, f"Expected Location {url!r}, got {location!r}"
    assert json_body(response) == {"error": None, "url": url}, (
        f"Unexpected redirect body: {response.text[:500]}"
    )


def assert_error(response: Response, status: int, error: str) -> None:
    """Assert *response* is a JSON error with no ``Location`` header."""
    assert response.status == status, (
        f"Expected status {status}, got {response.status}. Body: {response.text[:500]}"
    )
    assert response.content_type == "application/json", (
        f"Expected application/json, got {response.content_type!r}"
    )
    assert json_body(response) == {"error": error}, (
        f"Expected error {error!r}, got body {response.text[:500]}"
    )
    assert response.header("location") is None, "Error response carries a Location header"
