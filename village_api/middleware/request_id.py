"""
Village Backend — Request ID Middleware
=========================================

What:  Gives every request a correlation ID, echoed in the X-Request-ID
       response header and in every `{"error": ..., "request_id": ...}` body.
How:   A client-supplied X-Request-ID is reused only when it is a short token
       of letters, digits, '-' or '_'. Anything else (empty, too long, spaces,
       control characters) is replaced by 8 hex characters from a UUID4, so a
       header value can never forge or split access-log lines.

Readers:
    - request_id_var: access log middleware, exception handlers in main.py
    - request.state.request_id: route handlers
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: str | None) -> str:
    """Return the client's ID when it is a safe token, else a fresh one."""
    if header_value and _CLIENT_ID_PATTERN.match(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
