"""
Reports Module
"""
from .queries import (
    REPORTS,
    ReportSpec,
    products_above_price,
    inventory_value_by_category,
    customer_order_summary,
    products_in_delivered_orders,
    customers_without_orders,
    categories_above_sales,
    average_revenue_per_customer,
    order_summary,
)

__all__ = [
    "REPORTS",
    "ReportSpec",
    "products_above_price",
    "inventory_value_by_category",
    "customer_order_summary",
    "products_in_delivered_orders",
    "customers_without_orders",
    "categories_above_sales",
    "average_revenue_per_customer",
    "order_summary",
]
