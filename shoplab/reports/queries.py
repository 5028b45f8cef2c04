"""
Analytical Reports

Read-only queries over the storefront schema. Each report takes an open
`AsyncSession` and returns pydantic rows; none of them write.

    1. products_above_price           - filter + sort
    2. inventory_value_by_category    - GROUP BY with SUM(price * stock)
    3. customer_order_summary         - two inner joins + aggregates
    4. products_in_delivered_orders   - nested IN subqueries
    5. customers_without_orders       - LEFT JOIN ... IS NULL anti-join
    6. categories_above_sales         - GROUP BY ... HAVING
    7. average_revenue_per_customer   - aggregate over a derived table
    8. order_summary                  - read from the persisted view
"""

from datetime import datetime
from decimal import Decimal
from typing import Awaitable, Callable, Dict, List, NamedTuple, Optional

import structlog
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shoplab.config import get_settings
from shoplab.database.models import Customer, Order, OrderItem, Product
from shoplab.database.schema import order_summary_view

logger = structlog.get_logger(__name__)
settings = get_settings()


def _money(value: Optional[Decimal]) -> float:
    return round(float(value or 0), 2)


# =============================================================================
# RESPONSE ROWS
# =============================================================================

class ProductPrice(BaseModel):
    """Product with its current list price"""
    product_id: int
    product_name: str
    category: str
    price: float


class CategoryInventory(BaseModel):
    """Stock on hand valued at list price, per category"""
    category: str
    product_count: int
    total_stock: int
    inventory_value: float


class CustomerOrderSummary(BaseModel):
    """Order count and revenue for a purchasing customer"""
    customer_id: int
    customer_name: str
    order_count: int
    total_revenue: float
    avg_order_value: float
    avg_item_value: float


class ProductRef(BaseModel):
    """Product identity without pricing"""
    product_id: int
    product_name: str
    category: str


class CustomerRef(BaseModel):
    """Customer identity and contact"""
    customer_id: int
    first_name: str
    last_name: str
    email: str


class CategorySales(BaseModel):
    """Sales total per category"""
    category: str
    units_sold: int
    total_sales: float


class RevenuePerCustomer(BaseModel):
    """Average revenue per purchasing customer (ARPU)"""
    purchasing_customers: int
    total_revenue: float
    average_revenue_per_customer: float


class OrderSummary(BaseModel):
    """One row of the order summary view"""
    order_id: int
    order_date: datetime
    customer_name: str
    status: str
    item_count: int
    order_total: float


# =============================================================================
# REPORTS
# =============================================================================

async def products_above_price(
    session: AsyncSession,
    min_price: Optional[Decimal] = None,
) -> List[ProductPrice]:
    """
    Products priced strictly above `min_price`, most expensive first.
    """
    if min_price is None:
        min_price = settings.reports.min_product_price

    result = await session.execute(
        select(
            Product.product_id,
            Product.product_name,
            Product.category,
            Product.price,
        )
        .where(Product.price > min_price)
        .order_by(Product.price.desc(), Product.product_id)
    )

    rows = [
        ProductPrice(
            product_id=row.product_id,
            product_name=row.product_name,
            category=row.category,
            price=_money(row.price),
        )
        for row in result
    ]
    logger.debug("products_above_price", min_price=str(min_price), rows=len(rows))
    return rows


async def inventory_value_by_category(session: AsyncSession) -> List[CategoryInventory]:
    """
    Inventory valuation per category: the sum of price * stock_quantity over
    every product in the category.
    """
    inventory_value = func.sum(Product.price * Product.stock_quantity)

    result = await session.execute(
        select(
            Product.category,
            func.count(Product.product_id).label("product_count"),
            func.sum(Product.stock_quantity).label("total_stock"),
            inventory_value.label("inventory_value"),
        )
        .group_by(Product.category)
        .order_by(inventory_value.desc())
    )

    return [
        CategoryInventory(
            category=row.category,
            product_count=row.product_count,
            total_stock=row.total_stock or 0,
            inventory_value=_money(row.inventory_value),
        )
        for row in result
    ]


async def customer_order_summary(session: AsyncSession) -> List[CustomerOrderSummary]:
    """
    Per-customer order count, revenue, average order value and average item
    value.

    Inner joins customers -> orders -> order_items, so customers who never
    ordered are left out. An order line's value is quantity * unit_price.
    """
    line_total = OrderItem.quantity * OrderItem.unit_price
    revenue = func.sum(line_total)

    result = await session.execute(
        select(
            Customer.customer_id,
            Customer.first_name,
            Customer.last_name,
            func.count(func.distinct(Order.order_id)).label("order_count"),
            revenue.label("total_revenue"),
            func.avg(line_total).label("avg_item_value"),
        )
        .join(Order, Order.customer_id == Customer.customer_id)
        .join(OrderItem, OrderItem.order_id == Order.order_id)
        .group_by(Customer.customer_id, Customer.first_name, Customer.last_name)
        .order_by(revenue.desc(), Customer.customer_id)
    )

    rows = []
    for row in result:
        total_revenue = float(row.total_revenue or 0)
        rows.append(
            CustomerOrderSummary(
                customer_id=row.customer_id,
                customer_name=f"{row.first_name} {row.last_name}",
                order_count=row.order_count,
                total_revenue=round(total_revenue, 2),
                avg_order_value=round(total_revenue / row.order_count, 2) if row.order_count else 0.0,
                avg_item_value=round(float(row.avg_item_value or 0), 2),
            )
        )
    return rows


async def products_in_delivered_orders(
    session: AsyncSession,
    status: Optional[str] = None,
) -> List[ProductRef]:
    """
    Products that appear on at least one order with the given status.

    Written as nested membership tests: product IN (order lines whose order
    IN (orders with status)).
    """
    if status is None:
        status = settings.reports.delivered_status

    delivered_orders = select(Order.order_id).where(Order.status == status)
    delivered_products = select(OrderItem.product_id).where(
        OrderItem.order_id.in_(delivered_orders)
    )

    result = await session.execute(
        select(Product.product_id, Product.product_name, Product.category)
        .where(Product.product_id.in_(delivered_products))
        .order_by(Product.product_id)
    )

    return [
        ProductRef(
            product_id=row.product_id,
            product_name=row.product_name,
            category=row.category,
        )
        for row in result
    ]


async def customers_without_orders(session: AsyncSession) -> List[CustomerRef]:
    """Customers with no orders at all (LEFT JOIN anti-join)."""
    result = await session.execute(
        select(
            Customer.customer_id,
            Customer.first_name,
            Customer.last_name,
            Customer.email,
        )
        .outerjoin(Order, Order.customer_id == Customer.customer_id)
        .where(Order.order_id.is_(None))
        .order_by(Customer.customer_id)
    )

    return [
        CustomerRef(
            customer_id=row.customer_id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
        )
        for row in result
    ]


async def categories_above_sales(
    session: AsyncSession,
    threshold: Optional[Decimal] = None,
) -> List[CategorySales]:
    """
    Categories whose total sales (sum of quantity * unit_price over their
    order lines) exceed `threshold`, highest first.
    """
    if threshold is None:
        threshold = settings.reports.category_sales_threshold

    total_sales = func.sum(OrderItem.quantity * OrderItem.unit_price)

    result = await session.execute(
        select(
            Product.category,
            func.sum(OrderItem.quantity).label("units_sold"),
            total_sales.label("total_sales"),
        )
        .join(OrderItem, OrderItem.product_id == Product.product_id)
        .group_by(Product.category)
        .having(total_sales > threshold)
        .order_by(total_sales.desc())
    )

    return [
        CategorySales(
            category=row.category,
            units_sold=row.units_sold,
            total_sales=_money(row.total_sales),
        )
        for row in result
    ]


async def average_revenue_per_customer(session: AsyncSession) -> RevenuePerCustomer:
    """
    ARPU over purchasing customers.

    The inner query totals revenue per customer; the outer query averages
    those totals. Customers without orders do not count.
    """
    customer_revenue = (
        select(
            Order.customer_id,
            func.sum(OrderItem.quantity * OrderItem.unit_price).label("revenue"),
        )
        .join(OrderItem, OrderItem.order_id == Order.order_id)
        .group_by(Order.customer_id)
        .subquery("customer_revenue")
    )

    result = await session.execute(
        select(
            func.count(customer_revenue.c.customer_id).label("customers"),
            func.sum(customer_revenue.c.revenue).label("total_revenue"),
            func.avg(customer_revenue.c.revenue).label("arpu"),
        )
    )
    row = result.one()

    return RevenuePerCustomer(
        purchasing_customers=row.customers or 0,
        total_revenue=_money(row.total_revenue),
        average_revenue_per_customer=round(float(row.arpu or 0), 4),
    )


async def order_summary(session: AsyncSession) -> List[OrderSummary]:
    """
    Rows of the `order_summary` view, by order id.

    The view must exist; see `shoplab.database.schema.create_order_summary_view`.
    """
    view = order_summary_view
    result = await session.execute(
        select(
            view.c.order_id,
            view.c.order_date,
            view.c.customer_name,
            view.c.status,
            view.c.item_count,
            view.c.order_total,
        ).order_by(view.c.order_id)
    )

    return [
        OrderSummary(
            order_id=row.order_id,
            order_date=row.order_date,
            customer_name=row.customer_name,
            status=row.status,
            item_count=row.item_count,
            order_total=_money(row.order_total),
        )
        for row in result
    ]


# =============================================================================
# REGISTRY
# =============================================================================

class ReportSpec(NamedTuple):
    """A numbered report and the coroutine that produces it"""
    number: int
    title: str
    run: Callable[[AsyncSession], Awaitable]


REPORTS: Dict[int, ReportSpec] = {
    spec.number: spec
    for spec in [
        ReportSpec(1, "Products priced above threshold", products_above_price),
        ReportSpec(2, "Inventory value by category", inventory_value_by_category),
        ReportSpec(3, "Orders and revenue per customer", customer_order_summary),
        ReportSpec(4, "Products in delivered orders", products_in_delivered_orders),
        ReportSpec(5, "Customers without orders", customers_without_orders),
        ReportSpec(6, "Categories above sales threshold", categories_above_sales),
        ReportSpec(7, "Average revenue per customer", average_revenue_per_customer),
        ReportSpec(8, "Order summary view", order_summary),
    ]
}
