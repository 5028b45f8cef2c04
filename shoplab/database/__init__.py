"""
Database Module
"""
from .connection import (
    init_database,
    close_database,
    get_db,
    get_db_dependency,
    get_engine,
    check_database_health,
)
from .models import Base, Customer, Product, Order, OrderItem
from .schema import (
    create_tables,
    create_order_summary_view,
    create_indexes,
    list_indexes,
    drop_schema,
)

__all__ = [
    "init_database",
    "close_database",
    "get_db",
    "get_db_dependency",
    "get_engine",
    "check_database_health",
    "Base",
    "Customer",
    "Product",
    "Order",
    "OrderItem",
    "create_tables",
    "create_order_summary_view",
    "create_indexes",
    "list_indexes",
    "drop_schema",
]
