# client_registry/adapters/outbound/persistence/database.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from client_registry.adapters.configuration.config import settings
from client_registry.adapters.outbound.persistence.models import Base

# Configure logger
logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for ``database_url``.

    PostgreSQL gets a pre-pinged connection pool. SQLite (used by the test
    suite) shares one connection so in-memory databases survive between
    sessions.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_async_engine(
        database_url,
        echo=False,
        pool_size=20,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        autoflush=False,
        bind=bind,
        expire_on_commit=False,
    )


database_url = settings.DATABASE_URL
logger.info(f"Connecting to database: {database_url.split('@')[-1]}")

try:
    engine = build_engine(database_url)
    AsyncSessionLocal = build_session_factory(engine)
    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error configuring database engine: {str(e)}")
    raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async context for database operations.

    Anything still pending when the block exits normally is committed; on
    error the session is rolled back. The session is closed on every path.

    Example:
        ```python
        async with get_db_context() as db:
            result = await db.execute(select(Client))
            clients = result.scalars().all()
        ```
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session dependency for FastAPI.

    Example:
        ```python
        @router.get("/clients")
        async def list_clients(db: AsyncSession = Depends(get_db)):
            ...
        ```
    """
    async with get_db_context() as session:
        yield session


async def create_tables(bind: AsyncEngine = None) -> None:
    """Create every table known to ``Base.metadata`` if missing."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
