"""
Analytics API Endpoints

Lists and runs the registered ad-hoc analytical queries.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
import structlog

from gold_analytics.analytics.registry import AnalyticalQuery, list_queries
from gold_analytics.data.tables import GoldTables
from gold_analytics.serving.api.dependencies import get_gold_tables, get_registered_query
from gold_analytics.serving.api.schemas import QueryInfo, TableResponse, to_table_response

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/queries", response_model=List[QueryInfo])
async def get_queries(
    theme: Optional[str] = Query(None, description="Only queries of this theme"),
) -> List[QueryInfo]:
    """List registered analytical queries."""
    return [
        QueryInfo(
            name=query.name,
            theme=query.theme,
            description=query.description,
            parameters=query.parameters,
        )
        for query in list_queries()
        if theme is None or query.theme == theme
    ]


@router.get("/queries/{query_name}", response_model=TableResponse)
async def run_analytical_query(
    query: AnalyticalQuery = Depends(get_registered_query),
    n: Optional[int] = Query(None, ge=1, description="Row limit for ranking queries"),
    as_of: Optional[date] = Query(None, description="Evaluation date for age-based queries"),
    reset_each_year: Optional[bool] = Query(None, description="Restart running totals each year"),
    tables: GoldTables = Depends(get_gold_tables),
) -> TableResponse:
    """
    Run a registered query.

    Parameters the query does not accept are ignored. Unknown names return
    404 before the base tables are read.
    """
    df = query.run(tables, n=n, as_of=as_of, reset_each_year=reset_each_year)
    logger.info("Query served", query=query.name, rows=df.height)
    return to_table_response(query.name, df)
