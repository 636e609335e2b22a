# client_registry/shared/middleware/logging_middleware.py (async version)

"""
Middleware for HTTP request logging.

Logs every registry request with the status it produced. Bodies are never
logged since registration requests carry plaintext secrets.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from client_registry.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request: method, path, status and duration."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        message = f"{request.method} {request.url.path} -> {response.status_code}"
        if settings.ENVIRONMENT != "production":
            query_params = dict(request.query_params)
            message += (
                f" | Query: {query_params if query_params else 'N/A'}"
                f" | Client: {request.client.host if request.client else 'N/A'}"
                f" | Time: {process_time:.4f}s"
            )

        logger.log(_level_for(response.status_code), message)
        return response
