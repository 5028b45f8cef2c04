"""
Unit Tests - Data Quality
"""
import warnings

import pytest
import polars as pl

from shoplab.quality.validators import (
    DataValidator,
    SeedValidationError,
    ValidationSeverity,
    ValidationStatus,
    create_customers_validator,
    create_order_items_validator,
    create_orders_validator,
    create_products_validator,
    validate_frames,
)


class TestDataValidator:
    """Tests for DataValidator"""

    def test_not_null_check_passes(self):
        """Test not null check with valid data"""
        df = pl.DataFrame({"id": [1, 2, 3], "name": ["a", "b", "c"]})

        validator = DataValidator()
        validator.add_not_null_check("id")

        result = validator.validate(df)

        assert result.status == ValidationStatus.PASSED
        assert result.passed_checks == 1

    def test_not_null_check_fails(self):
        """Test not null check with null values"""
        df = pl.DataFrame({"id": [1, None, 3], "name": ["a", "b", "c"]})

        validator = DataValidator()
        validator.add_not_null_check("id")

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.failed_checks == 1

    def test_missing_column_fails(self):
        df = pl.DataFrame({"id": [1, 2]})

        result = DataValidator().add_not_null_check("email").validate(df)

        assert result.status == ValidationStatus.FAILED
        assert "not found" in result.checks[0].message

    def test_unique_check_fails(self):
        """Test unique check with duplicates"""
        df = pl.DataFrame({"email": ["a@x.com", "b@x.com", "a@x.com"]})

        validator = DataValidator()
        validator.add_unique_check("email")

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED
        assert result.checks[0].failed_rows == 1

    def test_referential_integrity_emits_no_warnings(self):
        """Reference values are matched as a plain list"""
        parents = pl.DataFrame({"product_id": [1, 2, 3]})
        children = pl.DataFrame({"product_id": [1, 3, 3]})

        validator = DataValidator().add_referential_integrity_check("product_id", parents, "product_id")

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = validator.validate(children)

        assert result.status == ValidationStatus.PASSED

    def test_range_check_needs_a_bound(self):
        with pytest.raises(ValueError):
            DataValidator().add_range_check("price")

    def test_range_check(self):
        """Test range check"""
        df = pl.DataFrame({"price": [10.0, 50.0, -5.0, 200.0]})

        validator = DataValidator()
        validator.add_range_check("price", min_value=0, max_value=100)

        result = validator.validate(df)

        assert result.status == ValidationStatus.FAILED
        # Two values outside range: -5 and 200
        assert result.checks[0].failed_rows == 2

    def test_positive_check_allows_zero(self):
        df = pl.DataFrame({"price": [0.0, 1.5]})

        assert DataValidator().add_positive_check("price").validate(df).status == ValidationStatus.PASSED
        assert (
            DataValidator().add_positive_check("price", allow_zero=False).validate(df).status
            == ValidationStatus.FAILED
        )

    def test_enum_check_ignores_nulls(self):
        df = pl.DataFrame({"status": ["Shipped", None, "Delivered"]})

        validator = DataValidator()
        validator.add_enum_check("status", ["Pending", "Shipped", "Delivered"])

        assert validator.validate(df).status == ValidationStatus.PASSED

    def test_pattern_warning_is_partial(self):
        """A failing warning-level check does not fail the suite"""
        df = pl.DataFrame({"email": ["test@example.com", "invalid"]})

        validator = DataValidator()
        validator.add_pattern_check("email", r"@", severity=ValidationSeverity.WARNING)

        result = validator.validate(df)

        assert result.status == ValidationStatus.PARTIAL
        assert result.warning_count == 1

    def test_referential_integrity(self):
        parents = pl.DataFrame({"customer_id": [1, 2]})
        children = pl.DataFrame({"order_id": [10, 11, 12], "customer_id": [1, 2, 7]})

        validator = DataValidator()
        validator.add_referential_integrity_check("customer_id", parents, "customer_id")

        result = validator.validate(children)

        assert result.status == ValidationStatus.FAILED
        assert result.checks[0].failed_rows == 1


class TestPrebuiltValidators:
    """Tests for the storefront table validators"""

    def test_customers_validator(self, sample_customers_df):
        result = create_customers_validator().validate(sample_customers_df)

        assert result.status == ValidationStatus.PASSED
        assert result.passed_checks == len(result.checks)

    def test_duplicate_email_fails(self, sample_customers_df):
        df = sample_customers_df.with_columns(
            pl.lit("same@example.com").alias("email")
        )

        result = create_customers_validator().validate(df)

        assert result.status == ValidationStatus.FAILED
        assert any(c.name == "unique_email" for c in result.failures)

    def test_negative_price_fails(self, sample_products_df):
        df = sample_products_df.with_columns(
            pl.when(pl.col("product_id") == 1).then(-1.0).otherwise(pl.col("price")).alias("price")
        )

        result = create_products_validator().validate(df)

        assert result.status == ValidationStatus.FAILED
        assert [c.name for c in result.failures] == ["range_price"]

    def test_order_for_unknown_customer_fails(self, sample_customers_df, sample_orders_df):
        customers = sample_customers_df.filter(pl.col("customer_id") != 4)

        result = create_orders_validator(customers).validate(sample_orders_df)

        assert result.status == ValidationStatus.FAILED

    def test_unknown_status_only_warns(self, sample_customers_df, sample_orders_df):
        df = sample_orders_df.with_columns(
            pl.when(pl.col("order_id") == 2).then(pl.lit("Lost")).otherwise(pl.col("status")).alias("status")
        )

        result = create_orders_validator(sample_customers_df).validate(df)

        assert result.status == ValidationStatus.PARTIAL
        assert [c.name for c in result.failures] == ["enum_status"]
        assert result.failures[0].severity == ValidationSeverity.WARNING

    def test_missing_status_passes(self, sample_customers_df, sample_orders_df):
        """Order 4 has no status and relies on the column default"""
        result = create_orders_validator(sample_customers_df).validate(sample_orders_df)

        assert result.status == ValidationStatus.PASSED

    def test_zero_quantity_fails(self, sample_orders_df, sample_products_df, sample_order_items_df):
        df = sample_order_items_df.with_columns(pl.lit(0).alias("quantity"))

        result = create_order_items_validator(sample_orders_df, sample_products_df).validate(df)

        assert result.status == ValidationStatus.FAILED

    def test_sample_frames_pass(self, sample_frames):
        results = validate_frames(sample_frames)

        assert set(results) == {"customers", "products", "orders", "order_items"}
        assert all(r.status == ValidationStatus.PASSED for r in results.values())


class TestSeedValidationError:

    def test_message_lists_failures(self):
        df = pl.DataFrame({"id": [1, None]})
        result = DataValidator().add_not_null_check("id").validate(df)

        error = SeedValidationError("customers", result)

        assert isinstance(error, ValueError)
        assert error.table == "customers"
        assert "1 null values" in str(error)
