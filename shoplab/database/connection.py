"""
Database Connection Management

Async database engine and session factory with SQLAlchemy 2.0.
Implements session scoping, health checks, and graceful shutdown.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from shoplab.config import get_settings

logger = structlog.get_logger(__name__)
settings = get_settings()

# Global engine and session factory
_engine: Optional[AsyncEngine] = None
_async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ships with foreign key enforcement off; turn it on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def init_database(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """
    Initialize the database engine.

    Args:
        url: Override the configured database URL
        echo: Override the configured SQL echo flag

    Returns:
        AsyncEngine: The initialized database engine
    """
    global _engine, _async_session_factory

    database_url = make_url(url or settings.database.url)

    if _engine is not None:
        if url is not None and database_url != _engine.url:
            raise RuntimeError(
                "Database already initialized for a different URL. "
                "Call close_database() first."
            )
        logger.warning("Database already initialized")
        return _engine

    is_sqlite = database_url.get_backend_name() == "sqlite"

    engine_config = {
        "echo": settings.database.echo if echo is None else echo,
        "pool_pre_ping": True,
    }

    # An in-memory SQLite database lives only as long as its one connection
    if is_sqlite and database_url.database in (None, "", ":memory:"):
        engine_config["poolclass"] = StaticPool
    else:
        engine_config["poolclass"] = NullPool

    _engine = create_async_engine(database_url, **engine_config)

    if is_sqlite:
        event.listen(_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    _async_session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    # Verify connection
    try:
        async with _engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info(
            "Database connection established",
            backend=database_url.get_backend_name(),
            database=database_url.database,
        )
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
        raise

    return _engine


async def close_database() -> None:
    """
    Dispose of the database engine.

    Gracefully closes all pooled connections.
    """
    global _engine, _async_session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
        logger.info("Database engine disposed")


def get_engine() -> AsyncEngine:
    """
    Get the database engine.

    Returns:
        AsyncEngine: The active database engine

    Raises:
        RuntimeError: If database is not initialized
    """
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _engine


@asynccontextmanager
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session.

    Context manager that provides a database session and handles
    commit/rollback/close automatically.

    Yields:
        AsyncSession: Database session

    Example:
        async with get_db() as db:
            result = await db.execute(query)
    """
    if _async_session_factory is None:
        logger.error("Database not initialized when get_db() called")
        raise RuntimeError("Database not initialized. Call init_database() first.")

    session = _async_session_factory()
    try:
        yield session
        await session.commit()
    except Exception as e:
        logger.error("Database session error, rolling back", error=str(e), error_type=type(e).__name__)
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db_dependency() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Example:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_dependency)):
            ...
    """
    async with get_db() as session:
        yield session


async def check_database_health() -> dict:
    """
    Check database health status.

    Returns:
        dict: Health status with latency information
    """
    try:
        start = time.perf_counter()
        async with get_db() as db:
            await db.execute(text("SELECT 1"))
        latency_ms = (time.perf_counter() - start) * 1000

        return {
            "status": "healthy",
            "latency_ms": round(latency_ms, 2),
            "backend": get_engine().dialect.name,
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }
