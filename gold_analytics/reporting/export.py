"""
Report Export

Writes computed views to the configured output directory as Parquet or CSV
snapshots for downstream consumers that read files.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional

import polars as pl
import structlog

from gold_analytics.config import get_settings
from gold_analytics.data.tables import GoldTables
from gold_analytics.reporting.views import list_views, read_view

logger = structlog.get_logger(__name__)


@dataclass
class ExportResult:
    """Result of exporting one view"""
    view_name: str
    rows: int
    output_path: str
    exported_at: datetime


class ReportExporter:
    """
    Export reporting views to files.

    Example:
        exporter = ReportExporter(output_path="./out", file_format="csv")
        results = exporter.export_all(tables)
    """

    def __init__(
        self,
        output_path: Optional[str] = None,
        file_format: Optional[str] = None,
    ):
        settings = get_settings()
        self.output_path = Path(output_path or settings.reporting.output_dir)
        self.file_format = (file_format or settings.reporting.export_format).lower()
        if self.file_format not in ("parquet", "csv"):
            raise ValueError(f"Unsupported export format: {self.file_format}")

        self.output_path.mkdir(parents=True, exist_ok=True)

    def _write_output(self, df: pl.DataFrame, name: str) -> str:
        """Write a frame as a timestamped file"""
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        output_file = self.output_path / f"{name}_{timestamp}.{self.file_format}"

        if self.file_format == "parquet":
            df.write_parquet(output_file)
        else:
            df.write_csv(output_file)
        logger.info("Report written", rows=len(df), path=str(output_file))

        return str(output_file)

    def export_view(
        self,
        name: str,
        tables: GoldTables,
        as_of: Optional[date] = None,
    ) -> ExportResult:
        """Compute one view and write it out"""
        df = read_view(name, tables, as_of)
        output_file = self._write_output(df, name)
        return ExportResult(
            view_name=name,
            rows=len(df),
            output_path=output_file,
            exported_at=datetime.now(timezone.utc),
        )

    def export_all(self, tables: GoldTables, as_of: Optional[date] = None) -> List[ExportResult]:
        """Export every registered view"""
        return [self.export_view(name, tables, as_of) for name in list_views()]
