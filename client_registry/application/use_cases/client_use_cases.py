# client_registry/application/use_cases/client_use_cases.py (async version)

"""
Service for the client registry.

This module implements listing, fetching, registration, partial update and
deletion of client registrations. Each operation works inside the caller's
session and commits at most once.
"""

import logging
from typing import Any, Dict, Iterable, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from client_registry.adapters.outbound.persistence.repositories.client_repository import client_repository
from client_registry.adapters.outbound.security.secret_hasher import secret_hasher
from client_registry.application.dtos.client_dto import ClientCreate, ClientUpdate
from client_registry.application.ports.inbound import IClientUseCase
from client_registry.application.ports.outbound import IClientRepository, ISecretHasher
from client_registry.domain.models.client_domain_model import AccessTokenType, Client, ClientPage
from client_registry.domain.exceptions import (
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    DatabaseOperationException,
)
from client_registry.shared.utils.pagination import DEFAULT_PAGE_SIZE, clamp_page

logger = logging.getLogger(__name__)

# Collections with set semantics: duplicates are dropped, first occurrence wins
SET_FIELDS = ("allowed_cors_origins", "allowed_scopes")


def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


class AsyncClientService(IClientUseCase):
    """
    Service for client registrations.

    Validation happens before anything is written; the store is touched
    through the repository and committed once per operation.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            repository: IClientRepository = client_repository,
            hasher: ISecretHasher = secret_hasher,
    ):
        self.db_session = db_session
        self.repository = repository
        self.hasher = hasher

    async def list_clients(self, skip: int = 0, take: int = DEFAULT_PAGE_SIZE) -> ClientPage:
        skip, take = clamp_page(skip, take)
        total, db_clients = await self.repository.list_page(self.db_session, skip=skip, take=take)
        return ClientPage(
            skip=skip,
            total_size=total,
            clients=[self.repository.to_domain(db_client) for db_client in db_clients],
        )

    async def get_client(self, client_id: str) -> Client:
        db_client = await self.repository.get_by_client_id(self.db_session, client_id)
        if not db_client:
            logger.warning(f"Client not found: {client_id}")
            raise ResourceNotFoundException(
                detail=f"Client '{client_id}' not found",
                resource_id=client_id
            )
        return self.repository.to_domain(db_client)

    async def create_client(self, data: ClientCreate) -> Client:
        """
        Registers a new client.

        The token type is resolved and the secret hashed before the store is
        touched. The existence check, the insert and the commit share one
        session; the unique index on client_id turns a lost race into a
        conflict as well.

        Raises:
            InvalidInputException: If accessTokenType is not a known token type
            ResourceAlreadyExistsException: If the identifier is already registered
            DatabaseOperationException: On any other store failure
        """
        access_token_type = AccessTokenType.JWT
        if data.access_token_type is not None:
            access_token_type = AccessTokenType.parse(data.access_token_type)

        client = Client(
            id=data.id,
            name=data.name,
            allowed_cors_origins=_unique(data.allowed_cors_origins or []),
            redirect_uris=list(data.redirect_uris or []),
            post_logout_redirect_uris=list(data.post_logout_redirect_uris or []),
            allowed_scopes=_unique(data.allowed_scopes or []),
            access_token_type=access_token_type,
            enabled=True if data.enabled is None else data.enabled,
            secret_hashes=[self.hasher.hash(data.secret)] if data.secret else [],
        )

        try:
            if await self.repository.exists_client_id(self.db_session, client.id):
                logger.warning(f"Attempt to create duplicate client: {client.id}")
                raise ResourceAlreadyExistsException(
                    detail="Client already exists",
                    resource_id=client.id
                )

            await self.repository.create(self.db_session, client)
            await self.db_session.commit()

        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning(f"Unique constraint rejected client '{client.id}': {e.orig}")
            raise ResourceAlreadyExistsException(
                detail="Client already exists",
                resource_id=client.id
            )

        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Database error creating client '{client.id}': {e}")
            raise DatabaseOperationException(
                detail="Error creating client",
                original_error=e
            )

        logger.info(f"Client created: {client.id}")
        return client

    async def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """
        Partially updates a client.

        Omitted and null fields keep their stored value. Collections are
        replaced as a whole. A non-empty secret is hashed and added next to
        the existing credentials.

        Raises:
            ResourceNotFoundException: If the client does not exist
            InvalidInputException: If accessTokenType is not a known token type
            DatabaseOperationException: On store failure; nothing is committed
        """
        try:
            db_client = await self.repository.get_by_client_id(self.db_session, client_id, for_update=True)
            if not db_client:
                logger.warning(f"Update of unknown client: {client_id}")
                raise ResourceNotFoundException(
                    detail=f"Client '{client_id}' not found",
                    resource_id=client_id
                )

            changes = self._build_changes(data)
            new_secret_hash = self.hasher.hash(data.secret) if data.secret else None

            await self.repository.apply_changes(self.db_session, db_client, changes, new_secret_hash)
            await self.db_session.commit()

        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Database error updating client '{client_id}': {e}")
            raise DatabaseOperationException(
                detail=f"Error updating client '{client_id}'",
                original_error=e
            )

        except Exception:
            await self.db_session.rollback()
            raise

        logger.info(
            f"Client updated: {client_id} | Fields: {sorted(changes) or 'none'} | "
            f"Secret added: {new_secret_hash is not None}"
        )
        return self.repository.to_domain(db_client)

    async def delete_client(self, client_id: str) -> None:
        """
        Deletes a client by predicate. Deleting an unknown client is not an error.

        Raises:
            DatabaseOperationException: On store failure
        """
        try:
            deleted = await self.repository.delete_by_client_id(self.db_session, client_id)
            await self.db_session.commit()

        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Database error deleting client '{client_id}': {e}")
            raise DatabaseOperationException(
                detail=f"Error deleting client '{client_id}'",
                original_error=e
            )

        except DatabaseOperationException:
            await self.db_session.rollback()
            raise

        logger.info(f"Client delete requested: {client_id} | Removed: {deleted}")

    @staticmethod
    def _build_changes(data: ClientUpdate) -> Dict[str, Any]:
        """Translate the supplied request fields into stored values."""
        changes = data.sparse_dict(exclude={"id", "secret"})

        if "access_token_type" in changes:
            changes["access_token_type"] = AccessTokenType.parse(changes["access_token_type"])

        for field in SET_FIELDS:
            if field in changes:
                changes[field] = _unique(changes[field])

        return changes
