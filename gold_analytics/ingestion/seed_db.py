"""
Database Seeding

Creates the gold star schema and loads it from CSV exports.

Usage:
    python -m gold_analytics.ingestion.seed_db [data_dir]
"""

import asyncio
import sys
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from gold_analytics.data.tables import GoldTables
from gold_analytics.database.connection import close_database, get_db, init_database
from gold_analytics.database.models import Base, DimCustomer, DimProduct, FactSales
from gold_analytics.ingestion.loader import load_gold_tables_from_csv

logger = structlog.get_logger(__name__)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the gold tables if they do not exist"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Gold schema created")


async def execute_batch_insert(
    model: Any,
    records: List[Dict[str, Any]],
    chunk_size: int = 1000,
) -> None:
    """Insert records in chunks using a Core executemany insert"""
    if not records:
        return

    async with get_db() as db:
        for i in range(0, len(records), chunk_size):
            await db.execute(insert(model), records[i:i + chunk_size])
    logger.info("Inserted records", table=model.__tablename__, rows=len(records))


async def seed_gold_tables(tables: GoldTables) -> None:
    """Insert the gold tables, dimensions first"""
    await execute_batch_insert(DimCustomer, tables.customers.to_dicts())
    await execute_batch_insert(DimProduct, tables.products.to_dicts())
    await execute_batch_insert(FactSales, tables.sales.to_dicts())


async def main(data_dir: Optional[str] = None) -> None:
    logger.info("Starting database seeding", data_dir=data_dir)
    engine = await init_database()

    try:
        await create_schema(engine)
        tables = load_gold_tables_from_csv(data_dir)
        await seed_gold_tables(tables)
        logger.info("Database seeding completed")
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        raise
    finally:
        await close_database()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
