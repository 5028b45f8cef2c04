"""
Database Models - Storefront Schema

Four normalized tables for a small storefront:

- Customers: people who can place orders (unique email)
- Products: catalog with category, price and stock on hand
- Orders: order header owned by exactly one customer
- OrderItems: order lines with the unit price captured at order time

Secondary indexes are declared on the tables they belong to but are created
separately by `shoplab.database.schema.create_indexes`.
"""

from datetime import datetime
from decimal import Decimal
from typing import List

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    func,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


DEFAULT_ORDER_STATUS = "Pending"

# Statuses the storefront knows about; the column itself stays free text
ORDER_STATUSES = (DEFAULT_ORDER_STATUS, "Shipped", "Delivered")


class Customer(Base):
    """Customer Table"""
    __tablename__ = "customers"

    customer_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    join_date: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now()
    )

    # Relationships
    orders: Mapped[List["Order"]] = relationship(back_populates="customer")

    def __repr__(self) -> str:
        return f"<Customer {self.customer_id} {self.email}>"


class Product(Base):
    """
    Product Table

    Price is assumed non-negative; the schema does not enforce it.
    """
    __tablename__ = "products"

    product_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    order_items: Mapped[List["OrderItem"]] = relationship(back_populates="product")

    __table_args__ = (
        Index("ix_products_product_name", "product_name"),
    )

    def __repr__(self) -> str:
        return f"<Product {self.product_id} {self.product_name}>"


class Order(Base):
    """
    Order Table

    Status is free text; rows inserted without one get 'Pending' from the
    engine.
    """
    __tablename__ = "orders"

    order_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("customers.customer_id"), nullable=False
    )
    order_date: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now()
    )
    status: Mapped[str] = mapped_column(
        String(20), server_default=text(f"'{DEFAULT_ORDER_STATUS}'")
    )

    # Relationships
    customer: Mapped["Customer"] = relationship(back_populates="orders")
    items: Mapped[List["OrderItem"]] = relationship(back_populates="order")

    __table_args__ = (
        Index("ix_orders_customer_id", "customer_id"),
    )

    def __repr__(self) -> str:
        return f"<Order {self.order_id} {self.status}>"


class OrderItem(Base):
    """
    Order Item Table

    `unit_price` is a snapshot taken when the order was placed and does not
    follow later changes to `Product.price`.
    """
    __tablename__ = "order_items"

    order_item_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orders.order_id"), nullable=False
    )
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.product_id"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # Relationships
    order: Mapped["Order"] = relationship(back_populates="items")
    product: Mapped["Product"] = relationship(back_populates="order_items")

    def __repr__(self) -> str:
        return f"<OrderItem {self.order_item_id} order={self.order_id}>"
