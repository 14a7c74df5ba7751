"""
Analytical Query Registry

Every ad-hoc query is registered under a stable name with its theme so it can
be listed and run by name, e.g. from the HTTP API.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

import polars as pl
import structlog

from gold_analytics.analytics import exploration, measures, segmentation, trends
from gold_analytics.data.tables import GoldTables

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AnalyticalQuery:
    """A named, read-only query over the gold tables"""
    name: str
    theme: str
    description: str
    func: Callable[..., pl.DataFrame]

    @property
    def parameters(self) -> List[str]:
        """Optional keyword parameters the query accepts"""
        return list(inspect.signature(self.func).parameters)[1:]

    def run(self, tables: GoldTables, **params: Any) -> pl.DataFrame:
        """Run the query; parameters it does not accept and ``None`` values are ignored"""
        accepted = set(self.parameters)
        kwargs = {k: v for k, v in params.items() if k in accepted and v is not None}
        return self.func(tables, **kwargs)


_QUERIES = [
    # Exploration
    AnalyticalQuery("schema_columns", "exploration", "Columns and data types of the base tables", exploration.schema_columns),
    AnalyticalQuery("distinct_countries", "exploration", "Countries customers come from", exploration.distinct_countries),
    AnalyticalQuery("product_hierarchy", "exploration", "Category, subcategory and product combinations", exploration.product_hierarchy),
    AnalyticalQuery("order_date_range", "exploration", "First and last order date and months between", exploration.order_date_range),
    AnalyticalQuery("birthdate_range", "exploration", "Oldest and youngest birthdate with ages", exploration.birthdate_range),
    AnalyticalQuery("oldest_and_youngest_customers", "exploration", "Customers sharing the extreme birthdates", exploration.oldest_and_youngest_customers),
    # Measures
    AnalyticalQuery("business_metrics", "measures", "Headline business totals", measures.business_metrics),
    AnalyticalQuery("key_metrics_report", "measures", "Headline totals as name/value rows", measures.key_metrics_report),
    # Magnitude
    AnalyticalQuery("customers_by_country", "magnitude", "Customers per country", measures.customers_by_country),
    AnalyticalQuery("customers_by_gender", "magnitude", "Customers per gender", measures.customers_by_gender),
    AnalyticalQuery("products_by_category", "magnitude", "Products per category", measures.products_by_category),
    AnalyticalQuery("avg_cost_by_category", "magnitude", "Average product cost per category", measures.avg_cost_by_category),
    AnalyticalQuery("revenue_by_category", "magnitude", "Revenue per category", measures.revenue_by_category),
    AnalyticalQuery("revenue_by_customer", "magnitude", "Revenue per customer", measures.revenue_by_customer),
    AnalyticalQuery("items_by_country", "magnitude", "Sold items per customer country", measures.items_by_country),
    # Ranking
    AnalyticalQuery("top_products_by_revenue", "ranking", "Highest revenue products", measures.top_products_by_revenue),
    AnalyticalQuery("bottom_products_by_revenue", "ranking", "Lowest revenue products", measures.bottom_products_by_revenue),
    AnalyticalQuery("top_customers_by_revenue", "ranking", "Highest revenue customers", measures.top_customers_by_revenue),
    AnalyticalQuery("customers_with_fewest_orders", "ranking", "Customers with the fewest orders", measures.customers_with_fewest_orders),
    # Change over time
    AnalyticalQuery("monthly_sales", "change_over_time", "Sales, customers and quantity per month", trends.monthly_sales),
    AnalyticalQuery("yearly_sales", "change_over_time", "Sales, customers and quantity per year", trends.yearly_sales),
    AnalyticalQuery("cumulative_sales", "cumulative", "Monthly running total and moving average price", trends.cumulative_sales),
    AnalyticalQuery("yearly_product_performance", "performance", "Yearly product sales vs average and prior year", trends.yearly_product_performance),
    # Segmentation
    AnalyticalQuery("products_by_cost_range", "segmentation", "Products per cost band", segmentation.products_by_cost_range),
    AnalyticalQuery("customers_by_segment", "segmentation", "Customers per VIP/Regular/New segment", segmentation.customers_by_segment),
    AnalyticalQuery("category_contribution", "part_to_whole", "Category share of overall revenue", segmentation.category_contribution),
]

QUERIES: Dict[str, AnalyticalQuery] = {query.name: query for query in _QUERIES}


def list_queries() -> List[AnalyticalQuery]:
    return list(QUERIES.values())


def get_query(name: str) -> AnalyticalQuery:
    """
    Look up a registered query.

    Raises:
        KeyError: If no query is registered under ``name``
    """
    try:
        return QUERIES[name]
    except KeyError:
        raise KeyError(f"Unknown query '{name}'. Available queries: {sorted(QUERIES)}") from None


def run_query(name: str, tables: GoldTables, **params: Any) -> pl.DataFrame:
    """Run a registered query by name"""
    query = get_query(name)
    result = query.run(tables, **params)
    logger.info("Query executed", query=name, rows=result.height)
    return result
