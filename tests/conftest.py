"""
Test Suite Configuration
"""
import pytest
from typing import AsyncGenerator

import polars as pl
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from shoplab.config import Settings
from shoplab.data import customers_frame, order_items_frame, orders_frame, products_frame
from shoplab.database.connection import close_database, get_db, init_database
from shoplab.database.schema import create_order_summary_view, create_tables
from shoplab.ingestion.seed_db import seed_database


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )


@pytest.fixture
def database_url(tmp_path) -> str:
    """SQLite file database private to one test"""
    return f"sqlite+aiosqlite:///{tmp_path / 'shoplab-test.db'}"


@pytest.fixture
async def test_engine(database_url) -> AsyncGenerator[AsyncEngine, None]:
    """Initialize the module-level engine against an empty schema"""
    engine = await init_database(database_url)

    async with engine.begin() as conn:
        await conn.run_sync(create_tables)

    yield engine

    await close_database()


@pytest.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session on an empty schema"""
    async with get_db() as session:
        yield session


@pytest.fixture
async def seeded_engine(test_engine) -> AsyncEngine:
    """Engine whose database holds the sample rows and the order summary view"""
    async with get_db() as session:
        await seed_database(session)

    async with test_engine.begin() as conn:
        await conn.run_sync(create_order_summary_view)

    return test_engine


@pytest.fixture
async def seeded_db(seeded_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session on the seeded database"""
    async with get_db() as session:
        yield session


@pytest.fixture
def sample_customers_df() -> pl.DataFrame:
    return customers_frame()


@pytest.fixture
def sample_products_df() -> pl.DataFrame:
    return products_frame()


@pytest.fixture
def sample_orders_df() -> pl.DataFrame:
    return orders_frame()


@pytest.fixture
def sample_order_items_df() -> pl.DataFrame:
    return order_items_frame()


@pytest.fixture
def sample_frames(
    sample_customers_df,
    sample_products_df,
    sample_orders_df,
    sample_order_items_df,
) -> dict:
    """Fresh, mutable copies of the sample frames keyed by table"""
    return {
        "customers": sample_customers_df,
        "products": sample_products_df,
        "orders": sample_orders_df,
        "order_items": sample_order_items_df,
    }
