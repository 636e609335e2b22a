import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from client_registry.adapters.outbound.persistence.models import Client as ClientModel, ClientSecret
from client_registry.adapters.outbound.persistence.repositories.client_repository import AsyncClientCRUD
from client_registry.adapters.outbound.security.secret_hasher import secret_hasher
from client_registry.application.dtos.client_dto import ClientCreate, ClientUpdate
from client_registry.application.use_cases.client_use_cases import AsyncClientService
from client_registry.domain.exceptions import (
    DatabaseOperationException,
    InvalidInputException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from client_registry.domain.models.client_domain_model import AccessTokenType


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


async def _create_full_client(run_service, client_id: str = "app1"):
    await run_service("create_client", ClientCreate(
        id=client_id,
        name="App One",
        secret="s3cr3t",
        allowed_cors_origins=["https://app1.example.com"],
        redirect_uris=["https://app1.example.com/callback", "https://app1.example.com/alt"],
        post_logout_redirect_uris=["https://app1.example.com/bye"],
        allowed_scopes=["openid", "profile"],
        access_token_type="Reference",
    ))
    return await run_service("get_client", client_id)


async def test_create_with_defaults(run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1", secret="s3cr3t"))

    client = await run_service("get_client", "app1")

    assert client.id == "app1"
    assert client.enabled is True
    assert client.access_token_type is AccessTokenType.JWT
    assert client.redirect_uris == []
    assert client.allowed_scopes == []
    assert len(client.secret_hashes) == 1
    assert client.secret_hashes[0] != "s3cr3t"
    assert secret_hasher.verify("s3cr3t", client.secret_hashes[0])


async def test_create_without_secret(run_service) -> None:
    await run_service("create_client", ClientCreate(id="public-app"))

    client = await run_service("get_client", "public-app")

    assert client.secret_hashes == []


async def test_create_keeps_all_supplied_fields(run_service) -> None:
    client = await _create_full_client(run_service)

    assert client.name == "App One"
    assert client.redirect_uris == ["https://app1.example.com/callback", "https://app1.example.com/alt"]
    assert client.post_logout_redirect_uris == ["https://app1.example.com/bye"]
    assert client.allowed_cors_origins == ["https://app1.example.com"]
    assert client.allowed_scopes == ["openid", "profile"]
    assert client.access_token_type is AccessTokenType.REFERENCE


async def test_create_drops_duplicate_scopes(run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1", allowed_scopes=["read", "write", "read"]))

    client = await run_service("get_client", "app1")

    assert client.allowed_scopes == ["read", "write"]


async def test_create_duplicate_is_a_conflict(run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1", name="Original", secret="first"))

    with pytest.raises(ResourceAlreadyExistsException) as exc_info:
        await run_service("create_client", ClientCreate(id="app1", name="Impostor", secret="second"))

    assert exc_info.value.detail == "Client already exists"
    client = await run_service("get_client", "app1")
    assert client.name == "Original"
    assert len(client.secret_hashes) == 1
    assert secret_hasher.verify("first", client.secret_hashes[0])


async def test_unique_index_backs_up_the_existence_check(session_factory, run_service) -> None:
    class BlindRepository(AsyncClientCRUD):
        async def exists_client_id(self, db, client_id):
            return False

    await run_service("create_client", ClientCreate(id="app1", name="Original"))

    async with session_factory() as session:
        service = AsyncClientService(session, repository=BlindRepository(ClientModel))
        with pytest.raises(ResourceAlreadyExistsException):
            await service.create_client(ClientCreate(id="app1", name="Racer"))

    client = await run_service("get_client", "app1")
    assert client.name == "Original"
    assert await _count(session_factory, ClientModel) == 1


async def test_create_with_invalid_token_type_stores_nothing(session_factory, run_service) -> None:
    with pytest.raises(InvalidInputException):
        await run_service("create_client", ClientCreate(id="app1", access_token_type="Opaque"))

    assert await _count(session_factory, ClientModel) == 0


async def test_get_unknown_client(run_service) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await run_service("get_client", "nope")

    assert exc_info.value.detail == "Client 'nope' not found"


async def test_update_unknown_client_changes_nothing(session_factory, run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1"))

    with pytest.raises(ResourceNotFoundException):
        await run_service("update_client", "nope", ClientUpdate(name="Ghost", secret="x"))

    assert await _count(session_factory, ClientModel) == 1
    assert await _count(session_factory, ClientSecret) == 0


async def test_update_enabled_only_leaves_everything_else(run_service) -> None:
    before = await _create_full_client(run_service)

    await run_service("update_client", "app1", ClientUpdate(enabled=False))

    after = await run_service("get_client", "app1")
    assert after.enabled is False
    assert after.name == before.name
    assert after.secret_hashes == before.secret_hashes
    assert after.allowed_scopes == before.allowed_scopes
    assert after.redirect_uris == before.redirect_uris
    assert after.post_logout_redirect_uris == before.post_logout_redirect_uris
    assert after.allowed_cors_origins == before.allowed_cors_origins
    assert after.access_token_type == before.access_token_type


async def test_update_null_fields_are_ignored(run_service) -> None:
    before = await _create_full_client(run_service)

    await run_service("update_client", "app1", ClientUpdate.model_validate({
        "name": None,
        "redirectUris": None,
        "accessTokenType": None,
        "enabled": None,
    }))

    after = await run_service("get_client", "app1")
    assert after == before


async def test_update_replaces_collections_wholesale(run_service) -> None:
    before = await _create_full_client(run_service)

    await run_service("update_client", "app1", ClientUpdate(allowed_scopes=["read"], redirect_uris=[]))

    after = await run_service("get_client", "app1")
    assert after.allowed_scopes == ["read"]
    assert after.redirect_uris == []
    assert after.post_logout_redirect_uris == before.post_logout_redirect_uris


async def test_update_invalid_token_type_aborts_everything(run_service) -> None:
    before = await _create_full_client(run_service)

    with pytest.raises(InvalidInputException) as exc_info:
        await run_service("update_client", "app1", ClientUpdate(
            name="Renamed", enabled=False, secret="new-secret", access_token_type="Opaque",
        ))

    assert exc_info.value.detail == "Token type [Opaque] does not exist."
    after = await run_service("get_client", "app1")
    assert after == before


async def test_update_token_type(run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1"))

    await run_service("update_client", "app1", ClientUpdate(access_token_type="Reference"))

    client = await run_service("get_client", "app1")
    assert client.access_token_type is AccessTokenType.REFERENCE


async def test_update_secret_is_appended(run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1", secret="first"))

    await run_service("update_client", "app1", ClientUpdate(secret="second"))

    client = await run_service("get_client", "app1")
    assert len(client.secret_hashes) == 2
    assert secret_hasher.verify("first", client.secret_hashes[0])
    assert secret_hasher.verify("second", client.secret_hashes[1])


async def test_update_empty_secret_keeps_credentials(run_service) -> None:
    before = await _create_full_client(run_service)

    await run_service("update_client", "app1", ClientUpdate(secret=""))

    after = await run_service("get_client", "app1")
    assert after.secret_hashes == before.secret_hashes


async def test_update_ignores_id_in_body(run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1"))

    await run_service("update_client", "app1", ClientUpdate(id="renamed", name="Still app1"))

    client = await run_service("get_client", "app1")
    assert client.name == "Still app1"
    with pytest.raises(ResourceNotFoundException):
        await run_service("get_client", "renamed")


async def test_delete_is_idempotent(session_factory, run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1", secret="s3cr3t"))

    await run_service("delete_client", "app1")
    await run_service("delete_client", "app1")

    with pytest.raises(ResourceNotFoundException):
        await run_service("get_client", "app1")
    assert await _count(session_factory, ClientSecret) == 0


async def test_delete_leaves_other_clients(run_service) -> None:
    await run_service("create_client", ClientCreate(id="app1", secret="one"))
    await run_service("create_client", ClientCreate(id="app2", secret="two"))

    await run_service("delete_client", "app1")

    client = await run_service("get_client", "app2")
    assert len(client.secret_hashes) == 1


async def test_failed_commit_rolls_back_delete(session_factory, run_service, monkeypatch) -> None:
    await run_service("create_client", ClientCreate(id="app1"))

    async def failing_commit(self):
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    with pytest.raises(DatabaseOperationException):
        await run_service("delete_client", "app1")
    monkeypatch.undo()

    client = await run_service("get_client", "app1")
    assert client.id == "app1"


@pytest.mark.parametrize("skip, take", [(0, 20), (0, 3), (2, 3), (5, 10), (7, 5), (0, 0), (0, -4), (-3, 2)])
async def test_list_page_bounds(run_service, skip: int, take: int) -> None:
    for index in range(7):
        await run_service("create_client", ClientCreate(id=f"app{index}", name=f"App {index}"))

    page = await run_service("list_clients", skip=skip, take=take)

    effective_skip = max(0, skip)
    effective_take = 20 if take < 0 else min(take, 100)
    assert page.skip == effective_skip
    assert page.total_size == 7
    assert len(page.clients) <= effective_take
    assert len(page.clients) == min(effective_take, max(0, 7 - effective_skip))


async def test_list_is_in_store_order(run_service) -> None:
    for client_id in ("c", "a", "b"):
        await run_service("create_client", ClientCreate(id=client_id))

    page = await run_service("list_clients", skip=1, take=2)

    assert [client.id for client in page.clients] == ["a", "b"]
