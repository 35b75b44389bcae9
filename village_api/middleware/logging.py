"""
Village Backend — Access Log Middleware
=========================================

What:  One line per HTTP request on the "village_api.access" logger.
How:   Times the downstream call; the level follows the status code
       (5xx → ERROR, 4xx → WARNING, otherwise INFO).

Line format:
    PUT /updateAnnouncement/7 (/updateAnnouncement/{announcement_id}) 404 3.2ms [1f3a9c2e] from 10.0.0.4

    The route template after the path groups requests by endpoint even when
    ids differ; it is "-" when no route matched. The query string is left
    out because /queries and /user/profile carry usernames there, and
    bodies are never read (passwords travel in /login, /signup, /add-admin).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from village_api.middleware.request_id import request_id_var

logger = logging.getLogger("village_api.access")


def _status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    # Polled by load balancers every few seconds
    QUIET_PATHS = frozenset({"/health"})

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        route = request.scope.get("route")
        template = getattr(route, "path", "-")
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            _status_level(response.status_code),
            "%s %s (%s) %d %.1fms [%s] from %s",
            request.method,
            path,
            template,
            response.status_code,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "route": template,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
