"""
Gold Data Module
"""
from .tables import GoldTables, TABLE_SCHEMAS, conform
from .generators import DataGenerator

__all__ = [
    "GoldTables",
    "TABLE_SCHEMAS",
    "conform",
    "DataGenerator",
]
