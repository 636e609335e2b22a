# client_registry/adapters/outbound/persistence/repositories/__init__.py (async version)

"""
Repository module.

Exports the repository classes and their shared instances.
"""

from client_registry.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from client_registry.adapters.outbound.persistence.repositories.client_repository import (
    AsyncClientCRUD,
    client_repository,
    secret_repository,
)

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncClientCRUD",

    # Instances
    "client_repository",
    "secret_repository",
]
