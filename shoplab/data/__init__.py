"""
Sample Data Module
"""
from .sample import (
    customers_frame,
    products_frame,
    orders_frame,
    order_items_frame,
    sample_frames,
)

__all__ = [
    "customers_frame",
    "products_frame",
    "orders_frame",
    "order_items_frame",
    "sample_frames",
]
