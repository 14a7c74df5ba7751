"""
Reporting View Endpoints

Serves the customer and product reports, recomputed on every request.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
import structlog

from gold_analytics.data.tables import GoldTables
from gold_analytics.reporting.views import list_views, read_view
from gold_analytics.serving.api.dependencies import get_gold_tables, get_view_name
from gold_analytics.serving.api.schemas import TableResponse, ViewInfo, to_table_response

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("", response_model=List[ViewInfo])
async def get_views() -> List[ViewInfo]:
    """List the available reporting views."""
    return [ViewInfo(name=name, path=f"/api/v1/reports/{name}") for name in list_views()]


@router.get("/{view_name}", response_model=TableResponse)
async def get_report_view(
    view_name: str = Depends(get_view_name),
    as_of: Optional[date] = Query(None, description="Evaluation date for age and recency"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum rows to return"),
    tables: GoldTables = Depends(get_gold_tables),
) -> TableResponse:
    """
    Compute a reporting view.

    Unknown view names return 404 before the base tables are read.
    """
    df = read_view(view_name, tables, as_of)

    logger.info("View served", view=view_name, rows=df.height, as_of=str(as_of) if as_of else None)
    if limit is not None:
        df = df.head(limit)
    return to_table_response(view_name, df)
