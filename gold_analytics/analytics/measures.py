"""
Measure, Magnitude and Ranking Queries

Headline business metrics, grouped breakdowns by country, gender and
category, and top/bottom rankings by revenue. Breakdowns drop rows whose
grouping value is null. Rankings order equal values by their key.
"""

import polars as pl

from gold_analytics.data.tables import GoldTables


def _sales_with_products(tables: GoldTables) -> pl.DataFrame:
    return tables.sales.join(
        tables.products.select("product_key", "product_name", "category"),
        on="product_key",
        how="left",
    )


def _sales_with_customers(tables: GoldTables) -> pl.DataFrame:
    return tables.sales.join(
        tables.customers.select("customer_key", "first_name", "last_name", "country"),
        on="customer_key",
        how="left",
    )


def _count_by(df: pl.DataFrame, column: str, alias: str) -> pl.DataFrame:
    return (
        df.filter(pl.col(column).is_not_null())
        .group_by(column)
        .agg(pl.len().alias(alias))
        .sort([alias, column], descending=[True, False])
    )


# =============================================================================
# MEASURES
# =============================================================================

BUSINESS_METRIC_LABELS = {
    "total_sales": "Total Sales",
    "total_quantity": "Total Quantity",
    "avg_price": "Average Price",
    "total_orders": "Total Orders",
    "total_products": "Total Products",
    "total_customers": "Total Customers",
    "customers_with_orders": "Customers With Orders",
}


def business_metrics(tables: GoldTables) -> pl.DataFrame:
    """Headline totals in a single row"""
    sales = tables.sales
    metrics = {
        "total_sales": sales["sales_amount"].sum(),
        "total_quantity": sales["quantity"].sum(),
        "avg_price": sales["price"].mean(),
        "total_orders": sales["order_number"].drop_nulls().n_unique(),
        "total_products": tables.products["product_key"].drop_nulls().len(),
        "total_customers": tables.customers["customer_key"].drop_nulls().len(),
        "customers_with_orders": sales["customer_key"].drop_nulls().n_unique(),
    }
    return pl.DataFrame(
        [metrics],
        schema={
            "total_sales": pl.Float64,
            "total_quantity": pl.Int64,
            "avg_price": pl.Float64,
            "total_orders": pl.Int64,
            "total_products": pl.Int64,
            "total_customers": pl.Int64,
            "customers_with_orders": pl.Int64,
        },
    )


def key_metrics_report(tables: GoldTables) -> pl.DataFrame:
    """Headline totals as measure_name / measure_value rows"""
    row = business_metrics(tables).row(0, named=True)
    return pl.DataFrame(
        [
            {
                "measure_name": label,
                "measure_value": float(row[key]) if row[key] is not None else None,
            }
            for key, label in BUSINESS_METRIC_LABELS.items()
        ],
        schema={"measure_name": pl.Utf8, "measure_value": pl.Float64},
    )


# =============================================================================
# MAGNITUDE
# =============================================================================

def customers_by_country(tables: GoldTables) -> pl.DataFrame:
    return _count_by(tables.customers, "country", "total_customers")


def customers_by_gender(tables: GoldTables) -> pl.DataFrame:
    return _count_by(tables.customers, "gender", "total_customers")


def products_by_category(tables: GoldTables) -> pl.DataFrame:
    return _count_by(tables.products, "category", "total_products")


def avg_cost_by_category(tables: GoldTables) -> pl.DataFrame:
    return (
        tables.products.filter(pl.col("category").is_not_null())
        .group_by("category")
        .agg(pl.col("cost").mean().alias("avg_cost"))
        .sort(["avg_cost", "category"], descending=[True, False], nulls_last=True)
    )


def revenue_by_category(tables: GoldTables) -> pl.DataFrame:
    return (
        _sales_with_products(tables)
        .filter(pl.col("category").is_not_null())
        .group_by("category")
        .agg(pl.col("sales_amount").sum().alias("total_revenue"))
        .sort(["total_revenue", "category"], descending=[True, False])
    )


def revenue_by_customer(tables: GoldTables) -> pl.DataFrame:
    return (
        _sales_with_customers(tables)
        .filter(pl.col("customer_key").is_not_null())
        .group_by("customer_key")
        .agg(
            pl.col("first_name").first(),
            pl.col("last_name").first(),
            pl.col("sales_amount").sum().alias("total_revenue"),
        )
        .sort(["total_revenue", "customer_key"], descending=[True, False])
    )


def items_by_country(tables: GoldTables) -> pl.DataFrame:
    """Distribution of sold items across customer countries"""
    return (
        _sales_with_customers(tables)
        .filter(pl.col("country").is_not_null())
        .group_by("country")
        .agg(pl.col("quantity").sum().alias("total_sold_items"))
        .sort(["total_sold_items", "country"], descending=[True, False])
    )


# =============================================================================
# RANKING
# =============================================================================

def _product_revenue(tables: GoldTables) -> pl.DataFrame:
    return (
        _sales_with_products(tables)
        .filter(pl.col("product_name").is_not_null())
        .group_by("product_name")
        .agg(pl.col("sales_amount").sum().alias("total_revenue"))
    )


def top_products_by_revenue(tables: GoldTables, n: int = 5) -> pl.DataFrame:
    return (
        _product_revenue(tables)
        .sort(["total_revenue", "product_name"], descending=[True, False])
        .head(n)
    )


def bottom_products_by_revenue(tables: GoldTables, n: int = 5) -> pl.DataFrame:
    return (
        _product_revenue(tables)
        .sort(["total_revenue", "product_name"])
        .head(n)
    )


def top_customers_by_revenue(tables: GoldTables, n: int = 10) -> pl.DataFrame:
    return revenue_by_customer(tables).head(n)


def customers_with_fewest_orders(tables: GoldTables, n: int = 3) -> pl.DataFrame:
    return (
        _sales_with_customers(tables)
        .filter(pl.col("customer_key").is_not_null())
        .group_by("customer_key")
        .agg(
            pl.col("first_name").first(),
            pl.col("last_name").first(),
            pl.col("order_number").drop_nulls().n_unique().alias("total_orders"),
        )
        .sort(["total_orders", "customer_key"])
        .head(n)
    )
