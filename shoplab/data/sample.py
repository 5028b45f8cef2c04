"""
Sample Storefront Data

A handful of literal rows used to seed the tutorial database. Small enough to
check every report by hand:

- 5 customers, one of whom never places an order
- 6 products across 4 categories
- 5 orders from 4 distinct customers; order 4 carries no status and picks up
  the engine default
- 8 order items whose unit prices were captured at order time
"""

from datetime import datetime

import polars as pl


# =============================================================================
# FRAMES
# =============================================================================

def customers_frame() -> pl.DataFrame:
    """Sample customers; join_date is left to the engine default."""
    return pl.DataFrame({
        "customer_id": [1, 2, 3, 4, 5],
        "first_name": ["Alice", "Bob", "Carol", "David", "Eve"],
        "last_name": ["Johnson", "Smith", "Williams", "Brown", "Davis"],
        "email": [
            "alice.johnson@example.com",
            "bob.smith@example.com",
            "carol.williams@example.com",
            "david.brown@example.com",
            "eve.davis@example.com",
        ],
    })


def products_frame() -> pl.DataFrame:
    """Sample product catalog"""
    return pl.DataFrame({
        "product_id": [1, 2, 3, 4, 5, 6],
        "product_name": [
            "Laptop",
            "Smartphone",
            "Headphones",
            "The Great Gatsby",
            "T-Shirt",
            "Coffee Maker",
        ],
        "category": ["Electronics", "Electronics", "Electronics", "Books", "Clothing", "Home"],
        "price": [999.99, 599.99, 89.99, 12.99, 19.99, 49.99],
        "stock_quantity": [10, 25, 50, 100, 200, 30],
    })


def orders_frame() -> pl.DataFrame:
    """Sample orders; a null status means "use the engine default"."""
    return pl.DataFrame(
        {
            "order_id": [1, 2, 3, 4, 5],
            "customer_id": [1, 2, 1, 3, 4],
            "order_date": [
                datetime(2024, 1, 15, 10, 30),
                datetime(2024, 1, 20, 14, 0),
                datetime(2024, 2, 3, 9, 15),
                datetime(2024, 2, 10, 16, 45),
                datetime(2024, 2, 14, 11, 0),
            ],
            "status": ["Delivered", "Shipped", "Delivered", None, "Delivered"],
        },
        schema_overrides={"status": pl.Utf8},
    )


def order_items_frame() -> pl.DataFrame:
    """Sample order lines"""
    return pl.DataFrame({
        "order_item_id": [1, 2, 3, 4, 5, 6, 7, 8],
        "order_id": [1, 1, 2, 3, 3, 4, 5, 5],
        "product_id": [1, 3, 2, 4, 5, 6, 3, 5],
        "quantity": [1, 2, 1, 3, 2, 1, 1, 4],
        "unit_price": [999.99, 89.99, 599.99, 12.99, 19.99, 49.99, 89.99, 19.99],
    })


def sample_frames() -> dict:
    """All sample frames keyed by table name, parents first."""
    return {
        "customers": customers_frame(),
        "products": products_frame(),
        "orders": orders_frame(),
        "order_items": order_items_frame(),
    }
