"""
Named reporting views.

A view is a name bound to a report builder. Reading a view always rebuilds it
from the base tables; nothing is stored between reads.
"""

from datetime import date
from typing import Callable, Dict, List, Optional

import polars as pl
import structlog

from gold_analytics.data.tables import GoldTables
from gold_analytics.reporting.customers import build_customer_report
from gold_analytics.reporting.products import build_product_report

logger = structlog.get_logger(__name__)

ViewBuilder = Callable[[GoldTables, Optional[date]], pl.DataFrame]

VIEWS: Dict[str, ViewBuilder] = {
    "report_customers": lambda tables, as_of: build_customer_report(
        tables.sales, tables.customers, as_of
    ),
    "report_products": lambda tables, as_of: build_product_report(
        tables.sales, tables.products, as_of
    ),
}


def list_views() -> List[str]:
    return sorted(VIEWS)


def get_view(name: str) -> ViewBuilder:
    """
    Look up a view builder.

    Raises:
        KeyError: If no view is registered under ``name``
    """
    try:
        return VIEWS[name]
    except KeyError:
        raise KeyError(f"Unknown view '{name}'. Available views: {list_views()}") from None


def read_view(name: str, tables: GoldTables, as_of: Optional[date] = None) -> pl.DataFrame:
    """
    Compute a view from the base tables.

    Raises:
        KeyError: If no view is registered under ``name``
    """
    builder = get_view(name)
    logger.debug("Reading view", view=name)
    return builder(tables, as_of)
