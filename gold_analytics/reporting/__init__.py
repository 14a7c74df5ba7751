"""
Reporting Module
"""
from .customers import build_customer_report
from .products import build_product_report
from .views import VIEWS, list_views, read_view
from .export import ReportExporter

__all__ = [
    "build_customer_report",
    "build_product_report",
    "VIEWS",
    "list_views",
    "read_view",
    "ReportExporter",
]
