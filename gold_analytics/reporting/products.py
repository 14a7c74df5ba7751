"""
Product Report

Consolidates key product metrics and behaviours:
- name, category, subcategory and cost from the product dimension
- order, customer, sales and quantity counts per product
- High-Performer / Mid-Range / Low-Performer segmentation
- recency, average selling price, average order and monthly revenue
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
)
from gold_analytics.reporting.segments import classify_product

logger = structlog.get_logger(__name__)

PRODUCT_REPORT_COLUMNS = [
    "product_key",
    "product_name",
    "category",
    "subcategory",
    "cost",
    "last_sale_date",
    "recency_in_months",
    "product_segment",
    "lifespan",
    "total_orders",
    "total_sales",
    "total_quantity",
    "total_customers",
    "avg_selling_price",
    "avg_order_revenue",
    "avg_monthly_revenue",
]


def product_base(sales: pl.DataFrame, products: pl.DataFrame) -> pl.DataFrame:
    """Dated sales lines with product attributes attached"""
    dimension = products.select(
        "product_key", "product_name", "category", "subcategory", "cost"
    )
    return (
        sales.filter(
            pl.col("order_date").is_not_null() & pl.col("product_key").is_not_null()
        )
        .join(dimension, on="product_key", how="left")
    )


def build_product_report(
    sales: pl.DataFrame,
    products: pl.DataFrame,
    as_of: Optional[date] = None,
) -> pl.DataFrame:
    """
    Build the product report.

    Lines with a zero or missing quantity have no unit price and are left
    out of ``avg_selling_price`` instead of failing the division.

    Args:
        sales: Sales fact frame
        products: Product dimension frame
        as_of: Evaluation date for recency (configured default or today)

    Returns:
        One row per product with at least one dated sale, ordered by key
    """
    as_of = get_settings().reporting.resolve_as_of(as_of)
    base = product_base(sales, products)

    unit_price = (
        pl.when(pl.col("quantity") != 0)
        .then(pl.col("sales_amount") / pl.col("quantity"))
        .otherwise(None)
    )

    aggregated = (
        base.group_by("product_key")
        .agg(
            pl.col("product_name").first(),
            pl.col("category").first(),
            pl.col("subcategory").first(),
            pl.col("cost").first(),
            pl.col("order_number").drop_nulls().n_unique().alias("total_orders"),
            pl.col("customer_key").drop_nulls().n_unique().alias("total_customers"),
            pl.col("sales_amount").sum().alias("total_sales"),
            pl.col("quantity").sum().alias("total_quantity"),
            unit_price.mean().round(1).alias("avg_selling_price"),
            pl.col("order_date").min().alias("first_sale_date"),
            pl.col("order_date").max().alias("last_sale_date"),
        )
        .sort("product_key")
    )

    report = aggregated.with_columns(
        months_between_expr(pl.col("first_sale_date"), pl.col("last_sale_date")).alias("lifespan"),
        months_between_expr(pl.col("last_sale_date"), as_of).alias("recency_in_months"),
    ).with_columns(
        safe_divide_expr(pl.col("total_sales"), pl.col("total_orders")).alias("avg_order_revenue"),
        safe_divide_expr(
            pl.col("total_sales"), pl.col("lifespan"), fallback=pl.col("total_sales")
        ).alias("avg_monthly_revenue"),
    )

    report = classify_column(report, "product_segment", classify_product, "total_sales")

    logger.info(
        "Product report built",
        sales_rows=sales.height,
        products=report.height,
        as_of=as_of.isoformat(),
    )
    return report.select(PRODUCT_REPORT_COLUMNS)
