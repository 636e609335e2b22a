import httpx
import pytest

from client_registry.adapters.configuration.config import settings
from client_registry.adapters.outbound.security.api_token_manager import ApiTokenManager

CLIENTS = "/api/clients"


@pytest.fixture(autouse=True)
def api_auth_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "API_AUTH_ENABLED", True)


async def test_missing_token(client: httpx.AsyncClient) -> None:
    response = await client.get(CLIENTS)

    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"
    assert response.headers["www-authenticate"] == "Bearer"


async def test_invalid_token(client: httpx.AsyncClient) -> None:
    response = await client.get(CLIENTS, headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


async def test_token_without_registry_scope(client: httpx.AsyncClient) -> None:
    token = ApiTokenManager.create_api_token("ops", scopes=["openid"])

    response = await client.get(CLIENTS, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json()["code"] == "PERMISSION_DENIED"


async def test_valid_token(client: httpx.AsyncClient) -> None:
    headers = {"Authorization": f"Bearer {ApiTokenManager.create_api_token('ops')}"}

    created = await client.post(CLIENTS, json={"id": "app1"}, headers=headers)
    listed = await client.get(CLIENTS, headers=headers)

    assert created.status_code == 200
    assert listed.status_code == 200
    assert listed.json()["totalSize"] == 1


async def test_rejected_request_writes_nothing(client: httpx.AsyncClient) -> None:
    response = await client.post(CLIENTS, json={"id": "app1"})
    assert response.status_code == 401

    headers = {"Authorization": f"Bearer {ApiTokenManager.create_api_token('ops')}"}
    assert (await client.get(f"{CLIENTS}/app1", headers=headers)).status_code == 404
