"""
Unit Tests - Data Quality
"""
from datetime import date

import polars as pl

from gold_analytics.quality.validators import (
    DataValidator,
    ValidationSeverity,
    ValidationStatus,
    create_sales_validator,
    validate_gold_tables,
)


class TestDataValidator:
    """Tests for DataValidator"""

    def test_not_null_check_passes(self):
        """Test not null check with valid data"""
        df = pl.DataFrame({"customer_key": [1, 2, 3]})

        result = DataValidator("dim_customers").add_not_null_check("customer_key").validate(df)

        assert result.status == ValidationStatus.PASSED
        assert result.passed_checks == 1

    def test_not_null_check_fails(self):
        """Test not null check with null values"""
        df = pl.DataFrame({"customer_key": [1, None, 3]})

        result = DataValidator("dim_customers").add_not_null_check("customer_key").validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.failed_checks == 1
        assert result.checks[0].failed_rows == 1

    def test_unique_check_ignores_nulls(self):
        """Test unique check ignores nulls"""
        df = pl.DataFrame({"product_key": [1, 2, None, None]})

        result = DataValidator("dim_products").add_unique_check("product_key").validate(df)

        assert result.status == ValidationStatus.PASSED

    def test_unique_check_fails(self):
        """Test unique check with duplicates"""
        df = pl.DataFrame({"product_key": [1, 1, 2]})

        result = DataValidator("dim_products").add_unique_check("product_key").validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.checks[0].failed_rows == 1

    def test_positive_check(self):
        """Test positive check"""
        df = pl.DataFrame({"quantity": [0, 1, 2]})

        allow_zero = DataValidator("fact_sales").add_positive_check("quantity").validate(df)
        strict = DataValidator("fact_sales").add_positive_check("quantity", allow_zero=False).validate(df)

        assert allow_zero.status == ValidationStatus.PASSED
        assert strict.status == ValidationStatus.FAILED

    def test_warning_gives_partial_status(self):
        """Test warning gives partial status"""
        df = pl.DataFrame({"sales_amount": [-5.0, 10.0]})

        result = (
            DataValidator("fact_sales")
            .add_range_check("sales_amount", min_value=0, severity=ValidationSeverity.WARNING)
            .validate(df)
        )

        assert result.status == ValidationStatus.PARTIAL
        assert result.warning_count == 1

    def test_strict_mode_fails_on_warning(self):
        """Test strict mode fails on warning"""
        df = pl.DataFrame({"sales_amount": [-5.0]})

        result = (
            DataValidator("fact_sales", strict_mode=True)
            .add_range_check("sales_amount", min_value=0, severity=ValidationSeverity.WARNING)
            .validate(df)
        )

        assert result.status == ValidationStatus.FAILED

    def test_column_order_check(self):
        """Test column order check"""
        df = pl.DataFrame({
            "order_date": [date(2023, 1, 5), date(2023, 1, 9)],
            "shipping_date": [date(2023, 1, 12), date(2023, 1, 2)],
        })

        result = DataValidator("fact_sales").add_column_order_check("order_date", "shipping_date").validate(df)

        assert result.checks[0].failed_rows == 1

    def test_missing_column_fails(self):
        """Test missing column fails"""
        df = pl.DataFrame({"other": [1]})

        result = DataValidator("fact_sales").add_not_null_check("order_date").validate(df)

        assert result.status == ValidationStatus.FAILED
        assert "not found" in result.checks[0].message

    def test_success_rate(self):
        """Test success rate"""
        df = pl.DataFrame({"customer_key": [1, None]})

        result = (
            DataValidator("dim_customers")
            .add_not_null_check("customer_key")
            .add_unique_check("customer_key")
            .validate(df)
        )

        assert result.success_rate == 50.0
        assert [check.name for check in result.failures()] == ["not_null_customer_key"]


class TestGoldTableValidation:
    """Tests for the gold table suite"""

    def test_sample_tables(self, gold_tables):
        """Test sample tables"""
        results = validate_gold_tables(gold_tables)

        assert results["dim_customers"].status == ValidationStatus.PASSED
        assert results["dim_products"].status == ValidationStatus.PASSED
        # One undated sales line
        assert results["fact_sales"].status == ValidationStatus.PARTIAL

    def test_orphan_keys_are_reported(self, gold_tables):
        """Test orphan keys are reported"""
        sales = gold_tables.sales.with_columns(pl.lit(99, dtype=pl.Int64).alias("customer_key"))

        result = create_sales_validator(gold_tables).validate(sales)

        orphan_check = next(c for c in result.checks if c.name == "ref_integrity_customer_key")
        assert orphan_check.failed_rows == sales.height

    def test_empty_tables(self, empty_tables):
        """Test empty tables"""
        results = validate_gold_tables(empty_tables)

        assert all(r.status == ValidationStatus.PASSED for r in results.values())
