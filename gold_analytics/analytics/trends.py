"""
Change-over-time Queries

Monthly and yearly series, cumulative running totals and moving averages,
and year-over-year product performance. Window values are produced by the
ordered scans in :mod:`gold_analytics.analytics.windows`.
"""

import polars as pl

from gold_analytics.analytics.windows import (
    lag,
    partition_mean,
    running_mean,
    running_total,
    scan_partitions,
)
from gold_analytics.data.tables import GoldTables
from gold_analytics.reporting.derivations import classify_column
from gold_analytics.reporting.segments import classify_average, classify_change


def _dated_sales(tables: GoldTables) -> pl.DataFrame:
    return tables.sales.filter(pl.col("order_date").is_not_null())


def monthly_sales(tables: GoldTables) -> pl.DataFrame:
    """Sales, customers and quantity per calendar month"""
    return (
        _dated_sales(tables)
        .with_columns(pl.col("order_date").dt.truncate("1mo").alias("month_start"))
        .group_by("month_start")
        .agg(
            pl.col("sales_amount").sum().alias("total_sales"),
            pl.col("customer_key").drop_nulls().n_unique().alias("total_customers"),
            pl.col("quantity").sum().alias("total_quantity"),
        )
        .sort("month_start")
        .with_columns(
            pl.col("month_start").dt.year().alias("order_year"),
            pl.col("month_start").dt.month().alias("order_month"),
        )
        .select(
            "order_year",
            "order_month",
            "month_start",
            "total_sales",
            "total_customers",
            "total_quantity",
        )
    )


def yearly_sales(tables: GoldTables) -> pl.DataFrame:
    """Sales, customers and quantity per calendar year"""
    return (
        _dated_sales(tables)
        .with_columns(pl.col("order_date").dt.year().alias("order_year"))
        .group_by("order_year")
        .agg(
            pl.col("sales_amount").sum().alias("total_sales"),
            pl.col("customer_key").drop_nulls().n_unique().alias("total_customers"),
            pl.col("quantity").sum().alias("total_quantity"),
        )
        .sort("order_year")
    )


def cumulative_sales(tables: GoldTables, reset_each_year: bool = False) -> pl.DataFrame:
    """
    Monthly sales with a running total and a moving average of price.

    The moving average is the mean of the monthly average prices seen so far.
    With ``reset_each_year`` both accumulators restart every January.
    """
    monthly = (
        _dated_sales(tables)
        .with_columns(pl.col("order_date").dt.truncate("1mo").alias("month_start"))
        .group_by("month_start")
        .agg(
            pl.col("sales_amount").sum().alias("total_sales"),
            pl.col("price").mean().alias("avg_price"),
        )
        .sort("month_start")
    )

    if reset_each_year:
        partitions = monthly["month_start"].dt.year().to_list()
    else:
        partitions = [None] * monthly.height

    running = scan_partitions(partitions, monthly["total_sales"].to_list(), running_total)
    moving = scan_partitions(partitions, monthly["avg_price"].to_list(), running_mean)

    return monthly.with_columns(
        pl.Series("running_total_sales", running, dtype=pl.Float64),
        pl.Series("moving_average_price", moving, dtype=pl.Float64),
    )


def yearly_product_performance(tables: GoldTables) -> pl.DataFrame:
    """
    Yearly product sales against the product's own average and prior year.

    A product's first observed year has no prior value and is reported as
    "No Change".
    """
    yearly = (
        _dated_sales(tables)
        .join(
            tables.products.select("product_key", "product_name"),
            on="product_key",
            how="left",
        )
        .filter(pl.col("product_name").is_not_null())
        .with_columns(pl.col("order_date").dt.year().alias("order_year"))
        .group_by(["order_year", "product_name"])
        .agg(pl.col("sales_amount").sum().alias("current_sales"))
        .sort(["product_name", "order_year"])
    )

    names = yearly["product_name"].to_list()
    current = yearly["current_sales"].to_list()
    average = partition_mean(names, current)
    prior = scan_partitions(names, current, lag)

    yearly = yearly.with_columns(
        pl.Series("avg_sales", average, dtype=pl.Float64),
        pl.Series("py_sales", prior, dtype=pl.Float64),
    ).with_columns(
        (pl.col("current_sales") - pl.col("avg_sales")).alias("diff_avg"),
        (pl.col("current_sales") - pl.col("py_sales")).alias("diff_py"),
    )
    yearly = classify_column(yearly, "compared_to_average", classify_average, "diff_avg")
    yearly = classify_column(yearly, "compared_to_last_year", classify_change, "diff_py")

    return yearly.select(
        "order_year",
        "product_name",
        "current_sales",
        "avg_sales",
        "diff_avg",
        "compared_to_average",
        "py_sales",
        "diff_py",
        "compared_to_last_year",
    )
