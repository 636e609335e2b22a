# client_registry/domain/__init__.py

"""
Domain components of the registry.

Exports the domain exceptions and models.
"""

from client_registry.domain.exceptions import (
    DomainException,
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    PermissionDeniedException,
    InvalidCredentialsException,
    DatabaseOperationException,
    InvalidInputException,
)
from client_registry.domain.models.client_domain_model import AccessTokenType, Client, ClientPage
