"""
Gold Table Validation

Rule-based quality checks over the gold tables. Checks never modify or drop
rows; reports are computed from whatever was loaded. Results are logged so
that dirty extracts (orphan keys, negative amounts, missing dates) are
visible before the numbers are trusted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import polars as pl
import structlog

from gold_analytics.data.tables import GoldTables

logger = structlog.get_logger(__name__)


class ValidationSeverity(str, Enum):
    """Severity levels for validation failures"""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationStatus(str, Enum):
    """Overall validation status"""
    PASSED = "passed"
    FAILED = "failed"
    PARTIAL = "partial"


@dataclass
class ValidationCheck:
    """Single validation check result"""
    name: str
    passed: bool
    severity: ValidationSeverity
    message: str
    details: Optional[Dict[str, Any]] = None
    failed_rows: int = 0
    total_rows: int = 0


@dataclass
class ValidationResult:
    """Complete validation suite result"""
    table: str
    status: ValidationStatus
    total_checks: int
    passed_checks: int
    failed_checks: int
    warning_count: int
    checks: List[ValidationCheck] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None

    @property
    def success_rate(self) -> float:
        """Percentage of passed checks"""
        if self.total_checks == 0:
            return 100.0
        return (self.passed_checks / self.total_checks) * 100

    def failures(self) -> List[ValidationCheck]:
        return [check for check in self.checks if not check.passed]


def _missing_column(name: str, column: str, severity: ValidationSeverity) -> ValidationCheck:
    return ValidationCheck(
        name=name,
        passed=False,
        severity=severity,
        message=f"Column '{column}' not found",
    )


class DataValidator:
    """
    Chainable validator for one gold table.

    Example:
        validator = DataValidator("fact_sales")
        validator.add_not_null_check("order_date")
        validator.add_positive_check("sales_amount")
        result = validator.validate(sales)
    """

    def __init__(self, table: str, strict_mode: bool = False):
        self.table = table
        self.strict_mode = strict_mode  # Warnings fail the suite
        self._checks: List[Callable[[pl.DataFrame], ValidationCheck]] = []

    def add_not_null_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for null values in column"""
        name = f"not_null_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)

            null_count = df[column].null_count()
            total = len(df)
            return ValidationCheck(
                name=name,
                passed=null_count == 0,
                severity=severity,
                message=f"Column '{column}' has {null_count} null values",
                details={"null_percentage": (null_count / total) * 100 if total > 0 else 0},
                failed_rows=null_count,
                total_rows=total,
            )

        self._checks.append(check)
        return self

    def add_unique_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check that non-null values of a key column are unique"""
        name = f"unique_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)

            values = df[column].drop_nulls()
            duplicate_count = len(values) - values.n_unique()
            return ValidationCheck(
                name=name,
                passed=duplicate_count == 0,
                severity=severity,
                message=f"Column '{column}' has {duplicate_count} duplicate values",
                failed_rows=duplicate_count,
                total_rows=len(df),
            )

        self._checks.append(check)
        return self

    def add_range_check(
        self,
        column: str,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for values within an inclusive range; nulls are ignored"""
        name = f"range_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)

            condition = pl.lit(False)
            if min_value is not None:
                condition = condition | (pl.col(column) < min_value)
            if max_value is not None:
                condition = condition | (pl.col(column) > max_value)

            out_of_range = df.filter(condition).height
            return ValidationCheck(
                name=name,
                passed=out_of_range == 0,
                severity=severity,
                message=f"Column '{column}' has {out_of_range} values outside [{min_value}, {max_value}]",
                details={"min": min_value, "max": max_value},
                failed_rows=out_of_range,
                total_rows=len(df),
            )

        self._checks.append(check)
        return self

    def add_positive_check(
        self,
        column: str,
        allow_zero: bool = True,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for non-negative (or strictly positive) values"""
        if allow_zero:
            return self.add_range_check(column, min_value=0, severity=severity)

        name = f"positive_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)

            non_positive = df.filter(pl.col(column) <= 0).height
            return ValidationCheck(
                name=name,
                passed=non_positive == 0,
                severity=severity,
                message=f"Column '{column}' has {non_positive} non-positive values",
                failed_rows=non_positive,
                total_rows=len(df),
            )

        self._checks.append(check)
        return self

    def add_column_order_check(
        self,
        earlier: str,
        later: str,
        severity: ValidationSeverity = ValidationSeverity.WARNING,
    ) -> "DataValidator":
        """Add check that ``earlier`` never exceeds ``later`` where both are set"""
        name = f"order_{earlier}_{later}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            for column in (earlier, later):
                if column not in df.columns:
                    return _missing_column(name, column, severity)

            violations = df.filter(pl.col(earlier) > pl.col(later)).height
            return ValidationCheck(
                name=name,
                passed=violations == 0,
                severity=severity,
                message=f"{violations} rows have '{earlier}' after '{later}'",
                failed_rows=violations,
                total_rows=len(df),
            )

        self._checks.append(check)
        return self

    def add_referential_integrity_check(
        self,
        column: str,
        reference_df: pl.DataFrame,
        reference_column: str,
        severity: ValidationSeverity = ValidationSeverity.WARNING,
    ) -> "DataValidator":
        """Add check that every non-null key exists in a dimension"""
        name = f"ref_integrity_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return _missing_column(name, column, severity)

            known = reference_df[reference_column].drop_nulls().unique().to_list()
            orphan = pl.col(column).is_not_null()
            if known:
                orphan = orphan & ~pl.col(column).is_in(known)
            orphans = df.filter(orphan).height
            return ValidationCheck(
                name=name,
                passed=orphans == 0,
                severity=severity,
                message=f"Column '{column}' has {orphans} orphan records",
                failed_rows=orphans,
                total_rows=len(df),
            )

        self._checks.append(check)
        return self

    def validate(self, df: pl.DataFrame) -> ValidationResult:
        """Run all checks against ``df``"""
        started_at = datetime.now(timezone.utc)
        results = [check(df) for check in self._checks]

        for result in results:
            if not result.passed:
                logger.warning(
                    "Validation failed",
                    table=self.table,
                    check=result.name,
                    message=result.message,
                    severity=result.severity.value,
                )

        passed_checks = sum(1 for r in results if r.passed)
        failed_checks = sum(1 for r in results if not r.passed and r.severity == ValidationSeverity.ERROR)
        warning_count = sum(1 for r in results if not r.passed and r.severity == ValidationSeverity.WARNING)

        if failed_checks > 0 or (warning_count > 0 and self.strict_mode):
            status = ValidationStatus.FAILED
        elif warning_count > 0:
            status = ValidationStatus.PARTIAL
        else:
            status = ValidationStatus.PASSED

        logger.info(
            "Validation complete",
            table=self.table,
            status=status.value,
            rows=len(df),
            passed=passed_checks,
            failed=failed_checks,
            warnings=warning_count,
        )

        return ValidationResult(
            table=self.table,
            status=status,
            total_checks=len(results),
            passed_checks=passed_checks,
            failed_checks=failed_checks,
            warning_count=warning_count,
            checks=results,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
        )


def create_customers_validator() -> DataValidator:
    """Validator for dim_customers"""
    return (
        DataValidator("dim_customers")
        .add_not_null_check("customer_key")
        .add_unique_check("customer_key")
        .add_not_null_check("birthdate", severity=ValidationSeverity.INFO)
    )


def create_products_validator() -> DataValidator:
    """Validator for dim_products"""
    return (
        DataValidator("dim_products")
        .add_not_null_check("product_key")
        .add_unique_check("product_key")
        .add_not_null_check("product_name", severity=ValidationSeverity.WARNING)
        .add_positive_check("cost", severity=ValidationSeverity.WARNING)
    )


def create_sales_validator(tables: GoldTables) -> DataValidator:
    """Validator for fact_sales, including foreign keys into both dimensions"""
    return (
        DataValidator("fact_sales")
        .add_not_null_check("order_number")
        .add_not_null_check("order_date", severity=ValidationSeverity.WARNING)
        .add_positive_check("sales_amount", severity=ValidationSeverity.WARNING)
        .add_positive_check("quantity", severity=ValidationSeverity.WARNING)
        .add_positive_check("price", severity=ValidationSeverity.WARNING)
        .add_column_order_check("order_date", "shipping_date")
        .add_referential_integrity_check("customer_key", tables.customers, "customer_key")
        .add_referential_integrity_check("product_key", tables.products, "product_key")
    )


def validate_gold_tables(tables: GoldTables) -> Dict[str, ValidationResult]:
    """Run the validation suite over all three tables"""
    return {
        "dim_customers": create_customers_validator().validate(tables.customers),
        "dim_products": create_products_validator().validate(tables.products),
        "fact_sales": create_sales_validator(tables).validate(tables.sales),
    }
