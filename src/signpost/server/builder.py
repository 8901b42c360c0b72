"""Response construction — maps a request outcome to an HTTP response.

Every response is a JSON object with an ``error`` field: ``null`` on
success, a short machine-stable string otherwise. Success adds ``url``
and a ``Location`` header carrying the same URL.

This is also where lookup failures lose their cause: every
``LookupFailed`` becomes the same ``NOT_FOUND`` outcome.
"""

import json
import logging
from enum import Enum

from signpost.errors import HTTPError, LookupFailed
from signpost.http.response import Response
from signpost.urls import TargetURL

logger = logging.getLogger("signpost.server")

JSON_CONTENT_TYPE = "application/json"

# Fixed fallback body, written out by hand so it can never fail.
INTERNAL_ERROR_BODY = b'{"error":"internal error"}'


class Outcome(Enum):
    """Terminal classification of one request.

    The value of each failure outcome is the ``error`` string sent to
    the client.
    """

    SUCCESS = "success"
    INVALID_METHOD = "invalid method"
    INVALID_PATH = "invalid path"
    NOT_FOUND = "not found"
    INTERNAL_ERROR = "internal error"


_ERROR_STATUS: dict[Outcome, int] = {
    Outcome.INVALID_METHOD: 405,
    Outcome.INVALID_PATH: 400,
    Outcome.NOT_FOUND: 404,
}


def outcome_for(exc: HTTPError | LookupFailed) -> Outcome:
    """Classify a pipeline failure."""
    if isinstance(exc, LookupFailed):
        return Outcome.NOT_FOUND
    try:
        return Outcome(exc.detail)
    except ValueError:
        return Outcome.INTERNAL_ERROR


def _encode(payload: dict[str, str | None]) -> bytes:
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def internal_error_response() -> Response:
    """500 with a fixed JSON body."""
    return Response(body=INTERNAL_ERROR_BODY, status=500, content_type=JSON_CONTENT_TYPE)


def build_response(
    outcome: Outcome,
    url: TargetURL | None = None,
    *,
    redirect_status: int = 301,
) -> Response:
    """Build the response for *outcome*.

    ``SUCCESS`` requires *url* and produces a redirect with
    ``redirect_status``. A body that cannot be serialized degrades to a
    500 for this request only.
    """
    if outcome is Outcome.INTERNAL_ERROR:
        return internal_error_response()

    if outcome is Outcome.SUCCESS:
        if url is None:
            logger.error("Successful outcome without a target URL")
            return internal_error_response()
        location = str(url)
        payload: dict[str, str | None] = {"error": None, "url": location}
        status = redirect_status
    else:
        location = None
        payload = {"error": outcome.value}
        status = _ERROR_STATUS[outcome]

    try:
        body = _encode(payload)
    except (TypeError, ValueError):
        logger.exception("Cannot serialize %s response body", outcome.name)
        return internal_error_response()

    response = Response(body=body, status=status, content_type=JSON_CONTENT_TYPE)
    if location is not None:
        response = response.with_header("Location", location)
    return response
