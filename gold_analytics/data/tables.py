"""
Gold Table Containers

Polars schemas for the three base tables and the ``GoldTables`` bundle every
report and analytical query reads from.
"""

from dataclasses import dataclass
from typing import Dict

import polars as pl


CUSTOMERS_SCHEMA: Dict[str, pl.DataType] = {
    "customer_key": pl.Int64,
    "customer_number": pl.Utf8,
    "first_name": pl.Utf8,
    "last_name": pl.Utf8,
    "birthdate": pl.Date,
    "gender": pl.Utf8,
    "country": pl.Utf8,
}

PRODUCTS_SCHEMA: Dict[str, pl.DataType] = {
    "product_key": pl.Int64,
    "product_name": pl.Utf8,
    "category": pl.Utf8,
    "subcategory": pl.Utf8,
    "cost": pl.Float64,
}

SALES_SCHEMA: Dict[str, pl.DataType] = {
    "order_number": pl.Utf8,
    "product_key": pl.Int64,
    "customer_key": pl.Int64,
    "order_date": pl.Date,
    "shipping_date": pl.Date,
    "sales_amount": pl.Float64,
    "quantity": pl.Int64,
    "price": pl.Float64,
}

TABLE_SCHEMAS: Dict[str, Dict[str, pl.DataType]] = {
    "dim_customers": CUSTOMERS_SCHEMA,
    "dim_products": PRODUCTS_SCHEMA,
    "fact_sales": SALES_SCHEMA,
}


def _parse_date(expr: pl.Expr) -> pl.Expr:
    return pl.coalesce(
        expr.str.to_date("%Y-%m-%d", strict=False),
        expr.str.strip_chars().str.slice(0, 10).str.to_date("%Y-%m-%d", strict=False),
    )


def conform(df: pl.DataFrame, schema: Dict[str, pl.DataType]) -> pl.DataFrame:
    """
    Shape a frame to a table schema.

    Known columns are cast, missing known columns are added as nulls and
    unknown columns are dropped. String dates are parsed as ISO dates; a
    trailing time of day, as in datetime exports, is discarded.
    """
    if df.height == 0:
        return pl.DataFrame(schema=schema)

    columns = []
    for name, dtype in schema.items():
        if name not in df.columns:
            columns.append(pl.lit(None, dtype=dtype).alias(name))
        elif dtype == pl.Date and df.schema[name] == pl.Utf8:
            columns.append(_parse_date(pl.col(name)).alias(name))
        elif dtype == pl.Date and df.schema[name] == pl.Datetime:
            columns.append(pl.col(name).dt.date().alias(name))
        else:
            columns.append(pl.col(name).cast(dtype).alias(name))
    return df.select(columns)


@dataclass(frozen=True)
class GoldTables:
    """The gold star schema as polars frames"""
    customers: pl.DataFrame
    products: pl.DataFrame
    sales: pl.DataFrame

    @classmethod
    def from_frames(
        cls,
        customers: pl.DataFrame,
        products: pl.DataFrame,
        sales: pl.DataFrame,
    ) -> "GoldTables":
        """Build a bundle, conforming each frame to its schema"""
        return cls(
            customers=conform(customers, CUSTOMERS_SCHEMA),
            products=conform(products, PRODUCTS_SCHEMA),
            sales=conform(sales, SALES_SCHEMA),
        )

    def by_name(self) -> Dict[str, pl.DataFrame]:
        """Frames keyed by their warehouse table name"""
        return {
            "dim_customers": self.customers,
            "dim_products": self.products,
            "fact_sales": self.sales,
        }
