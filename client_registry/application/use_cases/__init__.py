# client_registry/application/use_cases/__init__.py (async version)

"""
Application service module.

This package contains the application services that implement the business
logic of the registry.
"""

from client_registry.application.use_cases.client_use_cases import AsyncClientService

__all__ = [
    "AsyncClientService",
]
