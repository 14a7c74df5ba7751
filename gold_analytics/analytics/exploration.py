"""
Exploration Queries

Schema, dimension and date-range discovery over the gold tables.
"""

from datetime import date
from typing import Optional

import polars as pl
import structlog
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

from gold_analytics.config import get_settings
from gold_analytics.data.tables import GoldTables
from gold_analytics.reporting.derivations import months_between_expr, years_between_expr

logger = structlog.get_logger(__name__)


# =============================================================================
# SCHEMA
# =============================================================================

def schema_columns(tables: GoldTables) -> pl.DataFrame:
    """Columns and types of each base table"""
    rows = [
        {"table_name": table_name, "column_name": column_name, "data_type": str(dtype)}
        for table_name, df in tables.by_name().items()
        for column_name, dtype in df.schema.items()
    ]
    return pl.DataFrame(
        rows,
        schema={"table_name": pl.Utf8, "column_name": pl.Utf8, "data_type": pl.Utf8},
    )


async def list_tables(engine: AsyncEngine) -> pl.DataFrame:
    """Tables visible in the connected database"""
    async with engine.connect() as conn:
        names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    logger.debug("Listed database tables", count=len(names))
    return pl.DataFrame({"table_name": sorted(names)}, schema={"table_name": pl.Utf8})


async def list_columns(engine: AsyncEngine, table_name: str) -> pl.DataFrame:
    """Columns of one database table as reported by the database catalogue"""
    async with engine.connect() as conn:
        columns = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_columns(table_name)
        )
    return pl.DataFrame(
        [
            {
                "column_name": column["name"],
                "data_type": str(column["type"]),
                "is_nullable": bool(column.get("nullable", True)),
            }
            for column in columns
        ],
        schema={"column_name": pl.Utf8, "data_type": pl.Utf8, "is_nullable": pl.Boolean},
    )


# =============================================================================
# DIMENSIONS
# =============================================================================

def distinct_countries(tables: GoldTables) -> pl.DataFrame:
    """Countries customers come from"""
    return (
        tables.customers.select("country")
        .drop_nulls()
        .unique()
        .sort("country")
    )


def product_hierarchy(tables: GoldTables) -> pl.DataFrame:
    """Category / subcategory / product combinations"""
    return (
        tables.products.select("category", "subcategory", "product_name")
        .unique()
        .sort(["category", "subcategory", "product_name"], nulls_last=True)
    )


# =============================================================================
# DATES
# =============================================================================

def order_date_range(tables: GoldTables) -> pl.DataFrame:
    """First and last order date and the months between them"""
    return (
        tables.sales.filter(pl.col("order_date").is_not_null())
        .select(
            pl.col("order_date").min().alias("first_order_date"),
            pl.col("order_date").max().alias("last_order_date"),
        )
        .with_columns(
            months_between_expr(
                pl.col("first_order_date"), pl.col("last_order_date")
            ).alias("order_range_months")
        )
    )


def birthdate_range(tables: GoldTables, as_of: Optional[date] = None) -> pl.DataFrame:
    """Oldest and youngest birthdate with the corresponding ages"""
    as_of = get_settings().reporting.resolve_as_of(as_of)
    return (
        tables.customers.select(
            pl.col("birthdate").min().alias("oldest_birthdate"),
            pl.col("birthdate").max().alias("youngest_birthdate"),
        )
        .with_columns(
            years_between_expr(pl.col("oldest_birthdate"), as_of).alias("oldest_age"),
            years_between_expr(pl.col("youngest_birthdate"), as_of).alias("youngest_age"),
        )
        .select("oldest_birthdate", "oldest_age", "youngest_birthdate", "youngest_age")
    )


def oldest_and_youngest_customers(
    tables: GoldTables,
    as_of: Optional[date] = None,
) -> pl.DataFrame:
    """
    Customers born on the earliest or the latest birthdate.

    Every customer sharing an extreme birthdate is returned.
    """
    as_of = get_settings().reporting.resolve_as_of(as_of)
    customers = tables.customers
    columns = ["age_extreme", "customer_key", "first_name", "last_name", "birthdate", "age"]

    oldest = customers["birthdate"].min()
    youngest = customers["birthdate"].max()
    if oldest is None:
        return pl.DataFrame(
            schema={
                "age_extreme": pl.Utf8,
                "customer_key": pl.Int64,
                "first_name": pl.Utf8,
                "last_name": pl.Utf8,
                "birthdate": pl.Date,
                "age": pl.Int64,
            }
        )

    extremes = pl.concat([
        customers.filter(pl.col("birthdate") == oldest).with_columns(
            pl.lit("oldest").alias("age_extreme")
        ),
        customers.filter(pl.col("birthdate") == youngest).with_columns(
            pl.lit("youngest").alias("age_extreme")
        ),
    ])
    return (
        extremes.with_columns(years_between_expr(pl.col("birthdate"), as_of).alias("age"))
        .sort(["age_extreme", "customer_key"])
        .select(columns)
    )
