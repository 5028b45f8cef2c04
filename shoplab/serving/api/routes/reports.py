"""
Reports API Endpoints

Read-only REST access to the storefront reports.
"""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from shoplab.database.connection import get_db_dependency
from shoplab.reports import queries
from shoplab.reports.queries import (
    CategoryInventory,
    CategorySales,
    CustomerOrderSummary,
    CustomerRef,
    OrderSummary,
    ProductPrice,
    ProductRef,
    RevenuePerCustomer,
)

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/products", response_model=List[ProductPrice])
async def get_products_above_price(
    min_price: Optional[Decimal] = Query(None, ge=0, description="Exclusive lower price bound"),
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductPrice]:
    """Products priced above `min_price`, most expensive first."""
    return await queries.products_above_price(db, min_price)


@router.get("/inventory", response_model=List[CategoryInventory])
async def get_inventory_value(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[CategoryInventory]:
    """Inventory valuation per category."""
    return await queries.inventory_value_by_category(db)


@router.get("/customers/summary", response_model=List[CustomerOrderSummary])
async def get_customer_order_summary(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[CustomerOrderSummary]:
    """Order count and revenue per purchasing customer."""
    return await queries.customer_order_summary(db)


@router.get("/customers/inactive", response_model=List[CustomerRef])
async def get_customers_without_orders(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[CustomerRef]:
    """Customers who never placed an order."""
    return await queries.customers_without_orders(db)


@router.get("/customers/arpu", response_model=RevenuePerCustomer)
async def get_average_revenue_per_customer(
    db: AsyncSession = Depends(get_db_dependency),
) -> RevenuePerCustomer:
    """Average revenue per purchasing customer."""
    return await queries.average_revenue_per_customer(db)


@router.get("/products/delivered", response_model=List[ProductRef])
async def get_products_in_delivered_orders(
    status: Optional[str] = Query(None, min_length=1, description="Order status to match"),
    db: AsyncSession = Depends(get_db_dependency),
) -> List[ProductRef]:
    """Products appearing on orders with the given status (Delivered by default)."""
    return await queries.products_in_delivered_orders(db, status)


@router.get("/categories/top", response_model=List[CategorySales])
async def get_categories_above_sales(
    threshold: Optional[Decimal] = Query(None, ge=0, description="Exclusive lower sales bound"),
    db: AsyncSession = Depends(get_db_dependency),
) -> List[CategorySales]:
    """Categories whose total sales exceed `threshold`."""
    return await queries.categories_above_sales(db, threshold)


@router.get("/orders/summary", response_model=List[OrderSummary])
async def get_order_summary(
    db: AsyncSession = Depends(get_db_dependency),
) -> List[OrderSummary]:
    """Rows of the order summary view."""
    logger.debug("Reading order summary view")
    return await queries.order_summary(db)
