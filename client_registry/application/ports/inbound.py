# client_registry/application/ports/inbound.py

from abc import ABC, abstractmethod

from client_registry.application.dtos.client_dto import ClientCreate, ClientUpdate
from client_registry.domain.models.client_domain_model import Client, ClientPage


class IClientUseCase(ABC):
    """Interface for client registry use cases."""

    @abstractmethod
    async def list_clients(self, skip: int = 0, take: int = 20) -> ClientPage:
        """List one page of clients."""
        pass

    @abstractmethod
    async def get_client(self, client_id: str) -> Client:
        """Get a client by its identifier."""
        pass

    @abstractmethod
    async def create_client(self, data: ClientCreate) -> Client:
        """Register a new client."""
        pass

    @abstractmethod
    async def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """Partially update a client."""
        pass

    @abstractmethod
    async def delete_client(self, client_id: str) -> None:
        """Delete a client, if present."""
        pass
