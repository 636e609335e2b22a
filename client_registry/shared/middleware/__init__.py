# client_registry/shared/middleware/__init__.py (async version)

from client_registry.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from client_registry.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware

__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
]
