"""ASGI handler — runs one request through the redirect pipeline.

The only component that touches raw ASGI directly. Converts the scope
to a typed Request, checks the method, parses the key, resolves it
against the mapping store, and sends the built Response back through
ASGI send().
"""

import logging

from signpost._internal.asgi import Receive, Scope, Send
from signpost.errors import HTTPError, InvalidMethod, LookupFailed
from signpost.http.request import Request
from signpost.http.response import Response
from signpost.keys import parse_key
from signpost.lookup import MappingStore
from signpost.server.builder import (
    Outcome,
    build_response,
    internal_error_response,
    outcome_for,
)
from signpost.server.sender import send_response

logger = logging.getLogger("signpost.server")


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    store: MappingStore,
    redirect_status: int = 301,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        response = await resolve_request(request, store, redirect_status=redirect_status)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = internal_error_response()

    await send_response(response, send)


async def resolve_request(
    request: Request,
    store: MappingStore,
    *,
    redirect_status: int = 301,
) -> Response:
    """Map *request* to exactly one outcome and build its response."""
    try:
        if request.method != "GET":
            raise InvalidMethod()
        key = parse_key(request.path)
        target = await store.resolve(key)
    except HTTPError as exc:
        logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
        return build_response(outcome_for(exc))
    except LookupFailed as exc:
        logger.debug(
            "404 %s %s — %s%s",
            request.method,
            request.path,
            exc.reason.value,
            f": {exc.detail}" if exc.detail else "",
        )
        return build_response(outcome_for(exc))

    logger.debug("%d %s %s -> %s", redirect_status, request.method, request.path, target)
    return build_response(Outcome.SUCCESS, target, redirect_status=redirect_status)
