"""
Database Models - Gold Star Schema

The gold layer is a small star schema consumed by the reporting layer:

Fact Tables:
- FactSales: one row per sales line item

Dimension Tables:
- DimCustomer: customer attributes
- DimProduct: product catalog and categories

Column types are kept portable so the same models run against PostgreSQL in
production and SQLite in tests.
"""

from datetime import date
from typing import Optional, List

from sqlalchemy import (
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


# =============================================================================
# DIMENSION TABLES
# =============================================================================

class DimCustomer(Base):
    """
    Customer Dimension Table

    One row per customer, keyed by the surrogate ``customer_key``.
    """
    __tablename__ = "dim_customers"

    customer_key: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_number: Mapped[Optional[str]] = mapped_column(String(50))

    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    birthdate: Mapped[Optional[date]] = mapped_column(Date)
    gender: Mapped[Optional[str]] = mapped_column(String(20))
    country: Mapped[Optional[str]] = mapped_column(String(100))

    sales: Mapped[List["FactSales"]] = relationship(back_populates="customer")

    __table_args__ = (
        Index("ix_dim_customers_country", "country"),
    )


class DimProduct(Base):
    """
    Product Dimension Table

    One row per product, keyed by the surrogate ``product_key``.
    """
    __tablename__ = "dim_products"

    product_key: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_name: Mapped[Optional[str]] = mapped_column(String(200))
    category: Mapped[Optional[str]] = mapped_column(String(100))
    subcategory: Mapped[Optional[str]] = mapped_column(String(100))
    cost: Mapped[Optional[float]] = mapped_column(Float)

    sales: Mapped[List["FactSales"]] = relationship(back_populates="product")

    __table_args__ = (
        Index("ix_dim_products_category", "category"),
    )


# =============================================================================
# FACT TABLES
# =============================================================================

class FactSales(Base):
    """
    Sales Fact Table

    Line-item grain. Historical rows are never updated; the surrogate
    ``sales_id`` only exists to give the ORM a primary key.
    """
    __tablename__ = "fact_sales"

    sales_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_number: Mapped[Optional[str]] = mapped_column(String(50))

    # Dimension foreign keys
    product_key: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("dim_products.product_key")
    )
    customer_key: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("dim_customers.customer_key")
    )

    # Dates
    order_date: Mapped[Optional[date]] = mapped_column(Date)
    shipping_date: Mapped[Optional[date]] = mapped_column(Date)

    # Measures
    sales_amount: Mapped[Optional[float]] = mapped_column(Float)
    quantity: Mapped[Optional[int]] = mapped_column(Integer)
    price: Mapped[Optional[float]] = mapped_column(Float)

    customer: Mapped[Optional["DimCustomer"]] = relationship(back_populates="sales")
    product: Mapped[Optional["DimProduct"]] = relationship(back_populates="sales")

    __table_args__ = (
        Index("ix_fact_sales_customer", "customer_key"),
        Index("ix_fact_sales_product", "product_key"),
        Index("ix_fact_sales_order_date", "order_date"),
    )


GOLD_MODELS = {
    "dim_customers": DimCustomer,
    "dim_products": DimProduct,
    "fact_sales": FactSales,
}
