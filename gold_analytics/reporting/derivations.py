"""
Shared derivation helpers: guarded division, calendar differences and
applying the pure classifiers to frame columns.
"""

from datetime import date
from typing import Any, Callable, Union

import polars as pl

Number = Union[int, float]


def safe_divide_expr(
    numerator: pl.Expr,
    denominator: pl.Expr,
    fallback: Union[pl.Expr, Number] = 0,
) -> pl.Expr:
    """
    Column-wise true division guarded against a zero or null denominator.

    Rows whose denominator is 0 or null take ``fallback``; a null numerator
    over a usable denominator stays null.
    """
    if not isinstance(fallback, pl.Expr):
        fallback = pl.lit(float(fallback))
    return (
        pl.when(denominator.is_null() | (denominator == 0))
        .then(fallback.cast(pl.Float64))
        .otherwise(numerator / denominator)
    )


def _month_index(expr: pl.Expr) -> pl.Expr:
    return expr.dt.year().cast(pl.Int64) * 12 + expr.dt.month().cast(pl.Int64)


def months_between_expr(start: pl.Expr, end: Union[pl.Expr, date]) -> pl.Expr:
    """
    Calendar month boundaries crossed from ``start`` to ``end``.

    Days are ignored: 2023-01-31 to 2023-02-01 is 1, 2023-01-01 to
    2023-01-31 is 0. ``end`` may be a column or a fixed date.
    """
    if isinstance(end, date):
        return pl.lit(end.year * 12 + end.month, dtype=pl.Int64) - _month_index(start)
    return _month_index(end) - _month_index(start)


def years_between_expr(start: pl.Expr, end: date) -> pl.Expr:
    """Calendar year boundaries crossed from ``start`` to a fixed date"""
    return pl.lit(end.year, dtype=pl.Int64) - start.dt.year().cast(pl.Int64)


def classify_column(
    df: pl.DataFrame,
    name: str,
    classifier: Callable[..., Any],
    *columns: str,
) -> pl.DataFrame:
    """
    Add column ``name`` holding ``classifier(*row_values)`` for each row.

    Enum results are stored by value; ``None`` stays null.
    """
    values = []
    for row in zip(*(df[c].to_list() for c in columns)):
        result = classifier(*row)
        values.append(result.value if result is not None else None)
    return df.with_columns(pl.Series(name, values, dtype=pl.Utf8))
