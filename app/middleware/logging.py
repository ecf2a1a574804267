"""
Request logging middleware for FastAPI using Loguru.

Every request gets an ``X-Request-ID`` and one ``REQUEST``-level log record
with method, path, status and latency. The ID is bound to the loguru context
for the duration of the request, so records logged by routes and services
carry it too. Headers are not logged, so bearer tokens never reach the log
files.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one structured record per HTTP request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        start_time = time.time()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            process_time = time.time() - start_time

            client_ip = request.client.host if request.client else "unknown"
            if "X-Forwarded-For" in request.headers:
                forwarded_ips = request.headers["X-Forwarded-For"].split(",")
                if forwarded_ips:
                    client_ip = forwarded_ips[0].strip()

            logger.log(
                "REQUEST",
                "{method} {path} {status_code} {process_time_ms}ms",
                client_ip=client_ip,
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time_ms=round(process_time * 1000, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
