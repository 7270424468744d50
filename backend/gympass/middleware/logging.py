"""
GymPass Backend — Request Logging Middleware
=============================================

What:  One access-log line per request: method, path, status, duration,
       request id, client IP.
How:   Level follows the status class (5xx → ERROR, 4xx → WARNING, else INFO)
       so failed check-ins and auth errors stand out without extra tooling.

Privacy:
    Logged: method, path, status, duration, IP, request ID
    Not logged: request bodies (passwords, coordinates), Authorization
    header, cookies (refresh tokens)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from gympass.middleware.request_id import request_id_var

logger = logging.getLogger("gympass.access")

# Probed every few seconds by load balancers
SILENT_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SILENT_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
