"""
Schema DDL

Creates and drops the storefront schema in the order the tutorial walks
through it: tables first, the order summary view once data is in place, and
the secondary indexes last.

All functions take a synchronous `Connection` so they can be driven from an
async engine with `AsyncConnection.run_sync`:

    async with engine.begin() as conn:
        await conn.run_sync(create_tables)
"""

from typing import Dict, List

import structlog
from sqlalchemy import DateTime, Integer, Numeric, String, func, inspect, select
from sqlalchemy.engine import Connection
from sqlalchemy.schema import CreateIndex, CreateTable, Index
from sqlalchemy.sql import column, table
from sqlalchemy.sql.expression import Select

from shoplab.database.models import Base, Customer, Order, OrderItem

logger = structlog.get_logger(__name__)

ORDER_SUMMARY_VIEW = "order_summary"

# Read-only handle on the view for building queries against it
order_summary_view = table(
    ORDER_SUMMARY_VIEW,
    column("order_id", Integer),
    column("order_date", DateTime),
    column("customer_name", String),
    column("status", String),
    column("item_count", Integer),
    column("order_total", Numeric(12, 2)),
)


def order_summary_select() -> Select:
    """One row per order with its customer's name, item count and total.

    Orders without lines are kept with a zero count and total.
    """
    line_total = OrderItem.quantity * OrderItem.unit_price
    customer_name = Customer.first_name + " " + Customer.last_name

    return (
        select(
            Order.order_id,
            Order.order_date,
            customer_name.label("customer_name"),
            Order.status,
            func.coalesce(func.sum(OrderItem.quantity), 0).label("item_count"),
            func.coalesce(func.sum(line_total), 0).label("order_total"),
        )
        .join(Customer, Customer.customer_id == Order.customer_id)
        .outerjoin(OrderItem, OrderItem.order_id == Order.order_id)
        .group_by(
            Order.order_id,
            Order.order_date,
            Customer.first_name,
            Customer.last_name,
            Order.status,
        )
    )


def secondary_indexes() -> List[Index]:
    """Secondary indexes declared on the models, by name."""
    indexes = [ix for tbl in Base.metadata.sorted_tables for ix in tbl.indexes]
    return sorted(indexes, key=lambda ix: ix.name)


def create_tables(conn: Connection) -> List[str]:
    """
    Create the four tables if they do not exist yet.

    Only table DDL is emitted (columns, keys, unique and foreign key
    constraints); secondary indexes are left to `create_indexes`.

    Returns:
        Names of the tables, parents first
    """
    names = []
    for tbl in Base.metadata.sorted_tables:
        conn.execute(CreateTable(tbl, if_not_exists=True))
        names.append(tbl.name)

    logger.info("Tables created", tables=names)
    return names


def create_order_summary_view(conn: Connection) -> str:
    """
    (Re)create the order summary view.

    The view body is compiled for the connected dialect with literal values
    inlined, since view definitions cannot carry bound parameters.
    """
    body = order_summary_select().compile(
        dialect=conn.dialect,
        compile_kwargs={"literal_binds": True},
    )

    conn.exec_driver_sql(f"DROP VIEW IF EXISTS {ORDER_SUMMARY_VIEW}")
    conn.exec_driver_sql(f"CREATE VIEW {ORDER_SUMMARY_VIEW} AS {body}")

    logger.info("View created", view=ORDER_SUMMARY_VIEW)
    return ORDER_SUMMARY_VIEW


def create_indexes(conn: Connection) -> List[str]:
    """
    Create the secondary indexes if they do not exist yet.

    - ix_orders_customer_id: joins and lookups on the order's customer
    - ix_products_product_name: product name lookups and prefix searches

    Returns:
        Names of the indexes
    """
    names = []
    for index in secondary_indexes():
        conn.execute(CreateIndex(index, if_not_exists=True))
        names.append(index.name)

    logger.info("Indexes created", indexes=names)
    return names


def list_indexes(conn: Connection) -> Dict[str, List[str]]:
    """Named indexes currently present in the database, per table."""
    inspector = inspect(conn)
    return {
        tbl.name: sorted(ix["name"] for ix in inspector.get_indexes(tbl.name))
        for tbl in Base.metadata.sorted_tables
    }


def drop_schema(conn: Connection) -> None:
    """Drop the view and every table, children first."""
    conn.exec_driver_sql(f"DROP VIEW IF EXISTS {ORDER_SUMMARY_VIEW}")
    Base.metadata.drop_all(conn)
    logger.info("Schema dropped")
