# client_registry/domain/exceptions.py

"""
Domain exceptions for the client registry.

These exceptions carry a human-readable ``detail`` and a stable
``internal_code``. They know nothing about HTTP; the exception middleware
translates the code into a status code.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for every error raised by the registry."""

    internal_code = "DOMAIN_ERROR"

    def __init__(self, detail: str, internal_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if internal_code is not None:
            self.internal_code = internal_code


class ResourceNotFoundException(DomainException):
    """Resource not found."""

    internal_code = "RESOURCE_NOT_FOUND"

    def __init__(self, detail: str = "Resource not found", resource_id: Any = None):
        super().__init__(detail)
        self.resource_id = resource_id


class ResourceAlreadyExistsException(DomainException):
    """Resource already exists."""

    internal_code = "RESOURCE_ALREADY_EXISTS"

    def __init__(self, detail: str = "Resource already exists", resource_id: Any = None):
        super().__init__(detail)
        self.resource_id = resource_id


class InvalidInputException(DomainException):
    """Invalid input data."""

    internal_code = "INVALID_INPUT"

    def __init__(self, detail: str = "Invalid input data", fields: Optional[Dict[str, str]] = None):
        super().__init__(detail)
        self.details = fields or {}


class InvalidCredentialsException(DomainException):
    """Missing, invalid or expired credentials."""

    internal_code = "INVALID_CREDENTIALS"

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


class PermissionDeniedException(DomainException):
    """Permission denied."""

    internal_code = "PERMISSION_DENIED"

    def __init__(self, detail: str = "Permission denied", permission: Optional[str] = None):
        permission_info = f" (required scope: {permission})" if permission else ""
        super().__init__(f"{detail}{permission_info}")


class DatabaseOperationException(DomainException):
    """Error while executing a database operation."""

    internal_code = "DATABASE_OPERATION_ERROR"

    def __init__(self, detail: str = "Error executing database operation",
                 original_error: Optional[Exception] = None):
        super().__init__(detail)
        self.original_error = original_error
