# client_registry/shared/middleware/exception_middleware.py (async version)

"""
Middleware for centralized exception handling.

This module defines middleware that intercepts exceptions and formats
error responses as ``{"message": ..., "code": ...}``.
"""

import re
import time
import logging
import traceback
from typing import Callable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from starlette.middleware.base import BaseHTTPMiddleware

from client_registry.domain.exceptions import DomainException
from client_registry.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

STATUS_FOR_CODE = {
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RESOURCE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "DATABASE_OPERATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
}

CONSTRAINT_PATTERNS = [
    r'constraint "(.*?)"',
    r'UNIQUE constraint failed: (.*)',
    r'violates unique constraint "(.*?)"',
    r'duplicate key value violates unique constraint "(.*?)"',
]


def error_response(status_code: int, message: str, code: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "code": code, **extra})


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized exception handling.
    Captures specific exceptions and formats the response accordingly.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        client_host = request.client.host if request.client else "N/A"
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except DomainException as exc:
            status_code = STATUS_FOR_CODE.get(exc.internal_code, status.HTTP_400_BAD_REQUEST)
            message = exc.detail

            if status_code >= 500:
                original = getattr(exc, "original_error", None)
                logger.error(
                    f"Domain exception: {exc.detail} | Code: {exc.internal_code} | "
                    f"Cause: {type(original).__name__ if original else 'N/A'} | "
                    f"Path: {request.url.path}"
                )
                if original is not None and settings.ENVIRONMENT != "production":
                    message = f"{exc.detail}: {original}"
            else:
                logger.warning(
                    f"Domain exception: {exc.detail} | Code: {exc.internal_code} | "
                    f"Path: {request.url.path}"
                )

            extra = {}
            if getattr(exc, "details", None):
                extra["errors"] = exc.details
            headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None

            response = error_response(status_code, message, exc.internal_code, **extra)
            if headers:
                response.headers.update(headers)
            return response

        except IntegrityError as exc:
            constraint_name = self._extract_constraint_name(str(exc))
            logger.error(
                f"Integrity error: Type={type(exc).__name__} | "
                f"Constraint={constraint_name or 'N/A'} | "
                f"Path: {request.url.path} | Client: {client_host}"
            )
            message = "Database integrity error" if settings.ENVIRONMENT == "production" else str(exc.orig)
            return error_response(
                status.HTTP_409_CONFLICT,
                message,
                f"INTEGRITY_ERROR{f'_{constraint_name}' if constraint_name else ''}",
            )

        except SQLAlchemyError as exc:
            logger.error(
                f"Database error: Type={type(exc).__name__} | "
                f"Path: {request.url.path} | Client: {client_host}"
            )
            message = "Internal database error" if settings.ENVIRONMENT == "production" else str(exc)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "DATABASE_ERROR")

        except Exception as exc:
            if settings.ENVIRONMENT == "production":
                message = "Internal server error"
                logger.exception(
                    f"Unhandled exception: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | Client: {client_host}"
                )
            else:
                message = str(exc)
                logger.exception(
                    f"Unhandled exception: {str(exc)} | "
                    f"Path: {request.url.path} | Client: {client_host}\n"
                    f"Traceback: {traceback.format_exc()}"
                )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "INTERNAL_SERVER_ERROR")

    def _extract_constraint_name(self, error_message: str) -> Optional[str]:
        """
        Attempts to extract the constraint name from an integrity error message.

        Returns:
            The constraint name or None if not found
        """
        for pattern in CONSTRAINT_PATTERNS:
            match = re.search(pattern, error_message)
            if match:
                return match.group(1)
        return None
