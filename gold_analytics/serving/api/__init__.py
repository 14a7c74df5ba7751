"""
API Module
"""
from .middleware import RequestLoggingMiddleware
from .schemas import QueryInfo, TableResponse, ViewInfo

__all__ = [
    "RequestLoggingMiddleware",
    "QueryInfo",
    "TableResponse",
    "ViewInfo",
]
