"""
Ingestion Module
"""
from .loader import load_gold_tables_from_csv, load_gold_tables_from_db
from .seed_db import create_schema, seed_gold_tables

__all__ = [
    "load_gold_tables_from_csv",
    "load_gold_tables_from_db",
    "create_schema",
    "seed_gold_tables",
]
