"""
Analytical Query Module
"""
from .registry import AnalyticalQuery, QUERIES, get_query, list_queries, run_query

__all__ = [
    "AnalyticalQuery",
    "QUERIES",
    "get_query",
    "list_queries",
    "run_query",
]
