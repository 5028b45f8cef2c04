"""
Database Seeding

Loads the sample storefront rows into an empty database, parents first.
Run standalone with `python -m shoplab.ingestion.seed_db`.
"""

import asyncio
from decimal import Decimal
from typing import Any, Dict, List, Optional, Type

import polars as pl
import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shoplab.data import sample_frames
from shoplab.database.connection import close_database, get_db, get_engine, init_database
from shoplab.database.models import Base, Customer, Order, OrderItem, Product
from shoplab.database.schema import create_tables
from shoplab.quality.validators import SeedValidationError, ValidationStatus, validate_frames

logger = structlog.get_logger(__name__)

SEED_ORDER = [
    ("customers", Customer),
    ("products", Product),
    ("orders", Order),
    ("order_items", OrderItem),
]

MONEY_COLUMNS = {"price", "unit_price"}


def frame_to_records(df: pl.DataFrame) -> List[Dict[str, Any]]:
    """
    Convert a sample frame into insertable row dicts.

    Null values are dropped so the column falls back to its server default,
    and money columns are converted to Decimal.
    """
    records = []
    for row in df.to_dicts():
        record = {}
        for key, value in row.items():
            if value is None:
                continue
            if key in MONEY_COLUMNS:
                value = Decimal(str(value))
            record[key] = value
        records.append(record)
    return records


async def insert_records(session: AsyncSession, model: Type[Base], records: List[Dict[str, Any]]) -> int:
    """Helper to add a batch of ORM rows and flush them"""
    if not records:
        return 0

    session.add_all([model(**record) for record in records])
    await session.flush()
    logger.info("Seeded table", table=model.__tablename__, rows=len(records))
    return len(records)


async def seed_database(
    session: AsyncSession,
    frames: Optional[Dict[str, pl.DataFrame]] = None,
) -> Dict[str, int]:
    """
    Validate and insert the sample rows.

    Seeding is skipped when the customers table already holds rows.

    Args:
        session: Open database session; committed by the caller
        frames: Frames keyed by table name, defaults to the bundled sample data

    Returns:
        Rows inserted per table (empty when seeding was skipped)

    Raises:
        SeedValidationError: If any frame fails an error-severity check
    """
    frames = frames if frames is not None else sample_frames()

    results = validate_frames(frames)
    for table_name, result in results.items():
        if result.status == ValidationStatus.FAILED:
            raise SeedValidationError(table_name, result)

    existing = await session.scalar(select(func.count()).select_from(Customer))
    if existing:
        logger.warning("Database already seeded, skipping", customers=existing)
        return {}

    counts = {}
    for table_name, model in SEED_ORDER:
        counts[table_name] = await insert_records(
            session, model, frame_to_records(frames[table_name])
        )

    return counts


async def main():
    logger.info("Starting database seeding...")
    await init_database()

    try:
        async with get_engine().begin() as conn:
            await conn.run_sync(create_tables)
        async with get_db() as db:
            counts = await seed_database(db)
        logger.info("Database seeding completed", **counts)
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        raise
    finally:
        await close_database()


if __name__ == "__main__":
    from shoplab.config.logging import configure_logging

    configure_logging()
    asyncio.run(main())
