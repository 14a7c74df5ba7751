"""
Gold Table Loader

Reads the three base tables into polars frames, either from a directory of
CSV exports or from the warehouse database, and runs the data-quality suite
over the result. Quality failures are logged, never raised.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

import polars as pl
import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gold_analytics.config import get_settings
from gold_analytics.data.tables import GoldTables, TABLE_SCHEMAS, conform
from gold_analytics.database.connection import get_db
from gold_analytics.database.models import GOLD_MODELS
from gold_analytics.quality.validators import validate_gold_tables

logger = structlog.get_logger(__name__)

NULL_VALUES: List[str] = ["", "NULL", "null", "None", "NA", "N/A"]


def resolve_table_file(directory: Union[str, Path], table_name: str) -> Path:
    """
    Locate the CSV export of a table.

    Both ``fact_sales.csv`` and the schema-qualified ``gold.fact_sales.csv``
    are accepted.

    Raises:
        FileNotFoundError: If neither file exists
    """
    directory = Path(directory)
    candidates = [directory / f"{table_name}.csv", directory / f"gold.{table_name}.csv"]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    raise FileNotFoundError(
        f"No CSV export for table '{table_name}' in {directory} "
        f"(looked for {', '.join(c.name for c in candidates)})"
    )


def read_table_csv(path: Union[str, Path], table_name: str) -> pl.DataFrame:
    """Read one CSV export and conform it to the table schema"""
    df = pl.read_csv(
        path,
        null_values=NULL_VALUES,
        infer_schema_length=10000,
    )
    logger.info("Read CSV export", table=table_name, path=str(path), rows=len(df))
    return conform(df, TABLE_SCHEMAS[table_name])


def load_gold_tables_from_csv(
    directory: Optional[Union[str, Path]] = None,
    validate: bool = True,
) -> GoldTables:
    """
    Load the gold tables from CSV exports.

    Args:
        directory: Directory holding the exports (defaults to the configured data dir)
        validate: Run the data-quality suite after loading
    """
    directory = Path(directory or get_settings().reporting.data_dir)
    frames: Dict[str, pl.DataFrame] = {
        name: read_table_csv(resolve_table_file(directory, name), name)
        for name in TABLE_SCHEMAS
    }
    tables = GoldTables(
        customers=frames["dim_customers"],
        products=frames["dim_products"],
        sales=frames["fact_sales"],
    )
    if validate:
        validate_gold_tables(tables)
    return tables


async def _read_table(session: AsyncSession, table_name: str) -> pl.DataFrame:
    model = GOLD_MODELS[table_name]
    schema = TABLE_SCHEMAS[table_name]
    result = await session.execute(select(*(getattr(model, column) for column in schema)))
    rows = [tuple(row) for row in result.all()]
    logger.info("Read database table", table=table_name, rows=len(rows))
    return pl.DataFrame(rows, schema=schema, orient="row")


async def load_gold_tables_from_db(validate: bool = True) -> GoldTables:
    """
    Load the gold tables from the initialized database.

    Every call reads the tables afresh.
    """
    async with get_db() as db:
        customers = await _read_table(db, "dim_customers")
        products = await _read_table(db, "dim_products")
        sales = await _read_table(db, "fact_sales")

    tables = GoldTables(customers=customers, products=products, sales=sales)
    if validate:
        validate_gold_tables(tables)
    return tables
