# client_registry/adapters/outbound/persistence/models/__init__.py

"""
Data models module.

Exports every SQLAlchemy model of the registry.
"""

from client_registry.adapters.outbound.persistence.models.base_model import Base
from client_registry.adapters.outbound.persistence.models.client_model import Client, ClientSecret

__all__ = [
    "Base",
    "Client",
    "ClientSecret",
]
