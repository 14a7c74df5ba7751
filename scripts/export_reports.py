"""
Report Export
Computes the reporting views and writes them as Parquet or CSV files

Usage:
    python scripts/export_reports.py --source csv --data-dir ./data/gold
    python scripts/export_reports.py --source db --format csv --as-of 2024-01-01
"""

import argparse
import asyncio
from datetime import date

from gold_analytics.config.logging import configure_logging
from gold_analytics.data.tables import GoldTables
from gold_analytics.database.connection import close_database, init_database
from gold_analytics.ingestion.loader import load_gold_tables_from_csv, load_gold_tables_from_db
from gold_analytics.reporting.export import ReportExporter
from gold_analytics.reporting.views import list_views


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export reporting views")
    parser.add_argument("--source", choices=["csv", "db"], default="csv", help="Where to read the gold tables")
    parser.add_argument("--data-dir", default=None, help="CSV export directory (default: REPORT_DATA_DIR)")
    parser.add_argument("--output-dir", default=None, help="Output directory (default: REPORT_OUTPUT_DIR)")
    parser.add_argument("--format", choices=["parquet", "csv"], default=None, help="Output format")
    parser.add_argument("--view", choices=list_views(), action="append", help="View to export (repeatable)")
    parser.add_argument("--as-of", type=date.fromisoformat, default=None, help="Evaluation date (YYYY-MM-DD)")
    return parser.parse_args()


async def load_from_db() -> GoldTables:
    await init_database()
    try:
        return await load_gold_tables_from_db()
    finally:
        await close_database()


def main():
    args = parse_args()
    configure_logging()

    if args.source == "db":
        tables = asyncio.run(load_from_db())
    else:
        tables = load_gold_tables_from_csv(args.data_dir)

    exporter = ReportExporter(output_path=args.output_dir, file_format=args.format)
    views = args.view or list_views()
    for name in views:
        result = exporter.export_view(name, tables, args.as_of)
        print(f"   ✅ {result.view_name}: {result.rows:,} rows -> {result.output_path}")


if __name__ == "__main__":
    main()
