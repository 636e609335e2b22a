import os

# Settings are read at import time, configure them before importing the app
os.environ.update({
    "ENVIRONMENT": "testing",
    "POSTGRES_USER": "test",
    "POSTGRES_PASSWORD": "test",
    "POSTGRES_DB": "test",
    "POSTGRES_HOST": "localhost",
    "POSTGRES_PORT": "5432",
    "DATABASE_URL": "sqlite+aiosqlite://",
    "SECRET_KEY": "test-secret-key",
    "API_AUTH_ENABLED": "false",
    "CLIENT_SECRET_HASH_ROUNDS": "4",
})

import httpx
import pytest
import pytest_asyncio

from client_registry.main import app
from client_registry.adapters.inbound.api.deps import get_db_session
from client_registry.adapters.outbound.persistence.database import (
    build_engine,
    build_session_factory,
    create_tables,
)
from client_registry.application.use_cases.client_use_cases import AsyncClientService


@pytest_asyncio.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite://")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def run_service(session_factory):
    """Run one service call in its own session, like one request would."""

    async def run(operation: str, *args, **kwargs):
        async with session_factory() as session:
            service = AsyncClientService(session)
            return await getattr(service, operation)(*args, **kwargs)

    return run


@pytest_asyncio.fixture
async def client(session_factory):
    # See https://fastapi.tiangolo.com/advanced/testing-database
    async def override_get_db():
        session = session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    app.dependency_overrides[get_db_session] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
    app.dependency_overrides.clear()
