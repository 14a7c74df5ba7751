"""
Shared API dependencies

Name lookups are declared before ``get_gold_tables`` on each route, so an
unknown view or query is rejected without touching the warehouse.
"""

from fastapi import HTTPException

from gold_analytics.analytics.registry import AnalyticalQuery, get_query
from gold_analytics.data.tables import GoldTables
from gold_analytics.ingestion.loader import load_gold_tables_from_db
from gold_analytics.reporting.views import get_view


def get_view_name(view_name: str) -> str:
    """Path parameter of a registered view, 404 otherwise"""
    try:
        get_view(view_name)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])
    return view_name


def get_registered_query(query_name: str) -> AnalyticalQuery:
    """Path parameter resolved to its query, 404 otherwise"""
    try:
        return get_query(query_name)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])


async def get_gold_tables() -> GoldTables:
    """Read the base tables for the current request"""
    return await load_gold_tables_from_db()
