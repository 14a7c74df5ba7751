"""
Customer Report

Consolidates key customer metrics and behaviours:
- names, age and age group from the customer dimension
- order, sales, quantity and product counts per customer
- VIP / Regular / New segmentation
- recency, average order value and average monthly spend
"""

from datetime import date
from typing import Optional

import polars as pl
import structlog

from gold_analytics.config import get_settings
from gold_analytics.reporting.derivations import (
    classify_column,
    months_between_expr,
    safe_divide_expr,
    years_between_expr,
)
from gold_analytics.reporting.segments import classify_age, classify_customer

logger = structlog.get_logger(__name__)

CUSTOMER_REPORT_COLUMNS = [
    "customer_key",
    "customer_number",
    "customer_name",
    "age",
    "age_group",
    "customer_segment",
    "last_order_date",
    "recency",
    "total_orders",
    "total_sales",
    "total_quantity",
    "total_products",
    "lifespan",
    "avg_order_value",
    "avg_monthly_spend",
]


def customer_base(sales: pl.DataFrame, customers: pl.DataFrame) -> pl.DataFrame:
    """Dated sales lines with customer attributes attached"""
    dimension = customers.select(
        "customer_key",
        "customer_number",
        pl.concat_str(
            [pl.col("first_name"), pl.col("last_name")], separator=" ", ignore_nulls=True
        ).alias("customer_name"),
        "birthdate",
    )
    return (
        sales.filter(
            pl.col("order_date").is_not_null() & pl.col("customer_key").is_not_null()
        )
        .join(dimension, on="customer_key", how="left")
    )


def build_customer_report(
    sales: pl.DataFrame,
    customers: pl.DataFrame,
    as_of: Optional[date] = None,
) -> pl.DataFrame:
    """
    Build the customer report.

    Args:
        sales: Sales fact frame
        customers: Customer dimension frame
        as_of: Evaluation date for age and recency (configured default or today)

    Returns:
        One row per customer with at least one dated order, ordered by key
    """
    as_of = get_settings().reporting.resolve_as_of(as_of)
    base = customer_base(sales, customers)

    aggregated = (
        base.group_by("customer_key")
        .agg(
            pl.col("customer_number").first(),
            pl.col("customer_name").first(),
            pl.col("birthdate").first(),
            pl.col("order_number").drop_nulls().n_unique().alias("total_orders"),
            pl.col("sales_amount").sum().alias("total_sales"),
            pl.col("quantity").sum().alias("total_quantity"),
            pl.col("product_key").drop_nulls().n_unique().alias("total_products"),
            pl.col("order_date").min().alias("first_order_date"),
            pl.col("order_date").max().alias("last_order_date"),
        )
        .sort("customer_key")
    )

    report = aggregated.with_columns(
        years_between_expr(pl.col("birthdate"), as_of).alias("age"),
        months_between_expr(pl.col("first_order_date"), pl.col("last_order_date")).alias("lifespan"),
        months_between_expr(pl.col("last_order_date"), as_of).alias("recency"),
    ).with_columns(
        safe_divide_expr(pl.col("total_sales"), pl.col("total_orders")).alias("avg_order_value"),
        safe_divide_expr(
            pl.col("total_sales"), pl.col("lifespan"), fallback=pl.col("total_sales")
        ).alias("avg_monthly_spend"),
    )

    report = classify_column(report, "age_group", classify_age, "age")
    report = classify_column(
        report, "customer_segment", classify_customer, "lifespan", "total_sales"
    )

    logger.info(
        "Customer report built",
        sales_rows=sales.height,
        customers=report.height,
        as_of=as_of.isoformat(),
    )
    return report.select(CUSTOMER_REPORT_COLUMNS)
