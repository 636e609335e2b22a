# client_registry/adapters/outbound/persistence/repositories/client_repository.py (async version)

"""
Repository for client registrations.

This module implements the repository that performs database operations
on clients and their credential entries, implementing the
IClientRepository interface.
"""

from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from client_registry.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from client_registry.adapters.outbound.persistence.models import Client, ClientSecret
from client_registry.application.ports.outbound import IClientRepository
from client_registry.domain.models.client_domain_model import AccessTokenType, Client as DomainClient
from client_registry.domain.exceptions import DatabaseOperationException

# Domain attribute -> ORM column
_COLUMN_FOR_FIELD = {
    "name": "client_name",
    "allowed_cors_origins": "allowed_cors_origins",
    "redirect_uris": "redirect_uris",
    "post_logout_redirect_uris": "post_logout_redirect_uris",
    "allowed_scopes": "allowed_scopes",
    "access_token_type": "access_token_type",
    "enabled": "enabled",
}


class AsyncClientCRUD(AsyncCRUDBase[Client], IClientRepository):
    """
    Async repository for the Client entity.

    Extends AsyncCRUDBase with lookups by public client_id, paging,
    partial updates and predicate-based deletion.
    """

    async def get_by_client_id(
            self, db: AsyncSession, client_id: str, *, for_update: bool = False
    ) -> Optional[Client]:
        """
        Find a client by its public client_id.

        Args:
            db: Async database session
            client_id: Client identifier
            for_update: Lock the row for a read-modify-write

        Returns:
            Client found or None if it doesn't exist
        """
        return await self.get_by_field(db, "client_id", client_id, for_update=for_update)

    async def exists_client_id(self, db: AsyncSession, client_id: str) -> bool:
        return await self.exists(db, client_id=client_id)

    async def list_page(self, db: AsyncSession, *, skip: int, take: int) -> Tuple[int, List[Client]]:
        """
        Count the whole registry and load one page of it.

        Returns:
            Tuple of (total number of clients, clients on the page)
        """
        total = await self.count(db)
        if take == 0:
            return total, []
        return total, await self.get_multi(db, skip=skip, limit=take)

    async def create(self, db: AsyncSession, client: DomainClient) -> Client:
        """
        Stage a new client with its credential entries.

        Raises:
            IntegrityError: If the client_id is already taken
        """
        db_obj = Client(
            client_id=client.id,
            client_name=client.name,
            allowed_cors_origins=list(client.allowed_cors_origins),
            redirect_uris=list(client.redirect_uris),
            post_logout_redirect_uris=list(client.post_logout_redirect_uris),
            allowed_scopes=list(client.allowed_scopes),
            access_token_type=int(client.access_token_type),
            enabled=client.enabled,
            secrets=[ClientSecret(value=secret_hash) for secret_hash in client.secret_hashes],
        )
        db_obj = await self.add(db, db_obj)
        self.logger.info(f"Client staged: {client.id}")
        return db_obj

    async def apply_changes(
            self,
            db: AsyncSession,
            db_obj: Client,
            changes: Dict[str, Any],
            new_secret_hash: Optional[str] = None,
    ) -> Client:
        """
        Apply a sparse set of changes to a loaded client.

        Only the keys present in ``changes`` are written; collections are
        replaced as a whole. A new secret hash is appended to the existing
        credential entries.
        """
        try:
            for field, value in changes.items():
                column = _COLUMN_FOR_FIELD[field]
                if isinstance(value, AccessTokenType):
                    value = int(value)
                elif isinstance(value, (list, tuple)):
                    value = list(value)
                setattr(db_obj, column, value)

            if new_secret_hash:
                db_obj.secrets.append(ClientSecret(value=new_secret_hash))

            await db.flush()
            return db_obj
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating client '{db_obj.client_id}': {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error updating client '{db_obj.client_id}'",
                original_error=e
            )

    async def delete_by_client_id(self, db: AsyncSession, client_id: str) -> int:
        """
        Delete the client matching ``client_id`` and its credential entries.

        Returns:
            Number of clients deleted (0 or 1)
        """
        owner_ids = select(Client.id).where(Client.client_id == client_id)
        await secret_repository.delete_where(db, ClientSecret.client_pk.in_(owner_ids))
        return await self.delete_where(db, Client.client_id == client_id)

    def to_domain(self, db_model: Client) -> DomainClient:
        """
        Convert database model to domain model.

        Args:
            db_model: Client ORM model

        Returns:
            Domain model of client
        """
        return DomainClient(
            id=db_model.client_id,
            name=db_model.client_name,
            allowed_cors_origins=list(db_model.allowed_cors_origins or []),
            redirect_uris=list(db_model.redirect_uris or []),
            post_logout_redirect_uris=list(db_model.post_logout_redirect_uris or []),
            allowed_scopes=list(db_model.allowed_scopes or []),
            access_token_type=AccessTokenType.from_code(db_model.access_token_type),
            enabled=db_model.enabled,
            secret_hashes=[secret.value for secret in db_model.secrets],
            created_at=db_model.created_at,
            updated_at=db_model.updated_at,
        )


# Public instances to be used by use cases
client_repository = AsyncClientCRUD(Client)
secret_repository = AsyncCRUDBase(ClientSecret)
