"""Test utilities for signpost applications.

Provides an in-process ASGI test client and redirect/error assertions::

    from signpost.testing import TestClient, assert_redirect
"""

from signpost.testing.assertions import assert_error, assert_redirect, json_body
from signpost.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_error",
    "assert_redirect",
    "json_body",
]
