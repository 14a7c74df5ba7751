"""
API Response Models
"""

from typing import Any, Dict, List

import polars as pl
from pydantic import BaseModel


class TableResponse(BaseModel):
    """A computed view or query result"""
    name: str
    row_count: int
    columns: List[str]
    rows: List[Dict[str, Any]]


class ViewInfo(BaseModel):
    """A registered reporting view"""
    name: str
    path: str


class QueryInfo(BaseModel):
    """A registered analytical query"""
    name: str
    theme: str
    description: str
    parameters: List[str]


def to_table_response(name: str, df: pl.DataFrame) -> TableResponse:
    return TableResponse(
        name=name,
        row_count=df.height,
        columns=df.columns,
        rows=df.to_dicts(),
    )
