# client_registry/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from client_registry.domain.models.client_domain_model import Client


class IClientRepository(ABC):
    """Client repository interface."""

    @abstractmethod
    async def get_by_client_id(self, db: Any, client_id: str, *, for_update: bool = False) -> Optional[Any]:
        """Get a stored client by its public identifier."""
        pass

    @abstractmethod
    async def exists_client_id(self, db: Any, client_id: str) -> bool:
        """Check whether a client identifier is taken."""
        pass

    @abstractmethod
    async def list_page(self, db: Any, *, skip: int, take: int) -> Tuple[int, List[Any]]:
        """Return the total count and one offset page of stored clients."""
        pass

    @abstractmethod
    async def create(self, db: Any, client: Client) -> Any:
        """Stage a new client for insertion."""
        pass

    @abstractmethod
    async def apply_changes(
            self, db: Any, db_obj: Any, changes: Dict[str, Any], new_secret_hash: Optional[str] = None
    ) -> Any:
        """Apply a sparse set of changes to a stored client."""
        pass

    @abstractmethod
    async def delete_by_client_id(self, db: Any, client_id: str) -> int:
        """Delete by predicate; return the number of clients removed."""
        pass

    @abstractmethod
    def to_domain(self, db_model: Any) -> Client:
        """Convert a stored client into the domain model."""
        pass


class ISecretHasher(ABC):
    """One-way hashing of client secrets."""

    @abstractmethod
    def hash(self, secret: str) -> str:
        pass

    @abstractmethod
    def verify(self, secret: str, secret_hash: str) -> bool:
        """
        Check a presented secret against a stored hash.

        The registry only writes hashes; the token endpoint that shares the
        store authenticates clients through this check.
        """
        pass
