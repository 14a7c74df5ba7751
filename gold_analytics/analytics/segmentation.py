"""
Segmentation and Part-to-Whole Queries
"""

from datetime import date
from typing import Optional

import polars as pl

from gold_analytics.data.tables import GoldTables
from gold_analytics.reporting.customers import build_customer_report
from gold_analytics.reporting.derivations import classify_column, safe_divide_expr
from gold_analytics.reporting.segments import classify_cost


def products_by_cost_range(tables: GoldTables) -> pl.DataFrame:
    """Number of products in each cost band"""
    return (
        classify_column(tables.products, "cost_range", classify_cost, "cost")
        .filter(pl.col("cost_range").is_not_null())
        .group_by("cost_range")
        .agg(pl.len().alias("total_products"))
        .sort(["total_products", "cost_range"], descending=[True, False])
    )


def customers_by_segment(tables: GoldTables, as_of: Optional[date] = None) -> pl.DataFrame:
    """Number of customers in each VIP / Regular / New segment"""
    return (
        build_customer_report(tables.sales, tables.customers, as_of)
        .group_by("customer_segment")
        .agg(pl.len().alias("total_customers"))
        .sort(["total_customers", "customer_segment"], descending=[True, False])
    )


def category_contribution(tables: GoldTables) -> pl.DataFrame:
    """Share of overall revenue contributed by each category, in percent"""
    by_category = (
        tables.sales.join(
            tables.products.select("product_key", "category"),
            on="product_key",
            how="left",
        )
        .filter(pl.col("category").is_not_null())
        .group_by("category")
        .agg(pl.col("sales_amount").sum().alias("total_sales"))
    )
    overall = by_category["total_sales"].sum()

    return (
        by_category.with_columns(pl.lit(overall, dtype=pl.Float64).alias("overall_sales"))
        .with_columns(
            safe_divide_expr(pl.col("total_sales") * 100, pl.col("overall_sales"))
            .round(2)
            .alias("percentage_of_total")
        )
        .sort(["total_sales", "category"], descending=[True, False])
    )
