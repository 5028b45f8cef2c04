"""
Data Validation Module

Rule-based checks run over seed data before it reaches the database.
The schema only enforces keys, NOT NULL and email uniqueness; the business
assumptions it leaves implicit (non-negative prices, positive quantities,
known order statuses) are checked here.

Every rule is a polars expression that flags offending rows. A rule whose
column is missing from the frame fails outright.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

import polars as pl
import structlog

from shoplab.database.models import ORDER_STATUSES

logger = structlog.get_logger(__name__)


class ValidationSeverity(str, Enum):
    """Severity levels for validation failures"""
    ERROR = "error"  # blocks seeding
    WARNING = "warning"  # logged, seeding continues


class ValidationStatus(str, Enum):
    """Overall validation status"""
    PASSED = "passed"
    FAILED = "failed"
    PARTIAL = "partial"


@dataclass
class ValidationCheck:
    """Outcome of one rule against one frame"""
    name: str
    passed: bool
    severity: ValidationSeverity
    message: str
    failed_rows: int = 0
    total_rows: int = 0


@dataclass
class ValidationResult:
    """Outcome of a validator against one frame"""
    checks: List[ValidationCheck] = field(default_factory=list)

    @property
    def failures(self) -> List[ValidationCheck]:
        """Checks that did not pass"""
        return [c for c in self.checks if not c.passed]

    @property
    def passed_checks(self) -> int:
        return sum(1 for c in self.checks if c.passed)

    @property
    def failed_checks(self) -> int:
        return sum(1 for c in self.failures if c.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for c in self.failures if c.severity == ValidationSeverity.WARNING)

    @property
    def status(self) -> ValidationStatus:
        if self.failed_checks:
            return ValidationStatus.FAILED
        if self.warning_count:
            return ValidationStatus.PARTIAL
        return ValidationStatus.PASSED


class SeedValidationError(ValueError):
    """Raised when seed data fails an error-severity check."""

    def __init__(self, table: str, result: ValidationResult):
        self.table = table
        self.result = result
        messages = "; ".join(c.message for c in result.failures)
        super().__init__(f"Seed data for '{table}' failed validation: {messages}")


@dataclass
class _RowRule:
    name: str
    column: str
    offending: pl.Expr
    problem: str
    severity: ValidationSeverity

    def run(self, df: pl.DataFrame) -> ValidationCheck:
        if self.column not in df.columns:
            return ValidationCheck(
                name=self.name,
                passed=False,
                severity=self.severity,
                message=f"Column '{self.column}' not found",
                total_rows=df.height,
            )

        bad = df.filter(self.offending).height
        if bad:
            message = f"Column '{self.column}' has {bad} {self.problem}"
        else:
            message = f"Column '{self.column}' has no {self.problem}"

        return ValidationCheck(
            name=self.name,
            passed=bad == 0,
            severity=self.severity,
            message=message,
            failed_rows=bad,
            total_rows=df.height,
        )


class DataValidator:
    """
    Chainable set of row rules.

    Example:
        result = (
            DataValidator()
            .add_not_null_check("customer_id")
            .add_range_check("price", min_value=0)
            .validate(df)
        )
    """

    def __init__(self):
        self._rules: List[_RowRule] = []

    def _add(
        self,
        name: str,
        column: str,
        offending: pl.Expr,
        problem: str,
        severity: ValidationSeverity,
    ) -> "DataValidator":
        self._rules.append(_RowRule(name, column, offending, problem, severity))
        return self

    def add_not_null_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        return self._add(
            f"not_null_{column}", column, pl.col(column).is_null(), "null values", severity
        )

    def add_unique_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Every repeat after a value's first occurrence counts as one duplicate."""
        return self._add(
            f"unique_{column}",
            column,
            ~pl.col(column).is_first_distinct(),
            "duplicate values",
            severity,
        )

    def add_range_check(
        self,
        column: str,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Bounds are inclusive; at least one is required."""
        if min_value is None and max_value is None:
            raise ValueError("Range check needs min_value or max_value")

        col = pl.col(column)
        if min_value is None:
            offending = col > max_value
        elif max_value is None:
            offending = col < min_value
        else:
            offending = (col < min_value) | (col > max_value)

        return self._add(
            f"range_{column}",
            column,
            offending,
            f"values outside [{min_value}, {max_value}]",
            severity,
        )

    def add_positive_check(
        self,
        column: str,
        allow_zero: bool = True,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        return self.add_range_check(column, min_value=0 if allow_zero else 1, severity=severity)

    def add_pattern_check(
        self,
        column: str,
        pattern: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        col = pl.col(column)
        return self._add(
            f"pattern_{column}",
            column,
            col.is_not_null() & ~col.str.contains(pattern),
            "values not matching pattern",
            severity,
        )

    def add_enum_check(
        self,
        column: str,
        allowed_values: Sequence[str],
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Nulls pass; they are left to the column default."""
        col = pl.col(column)
        return self._add(
            f"enum_{column}",
            column,
            col.is_not_null() & ~col.is_in(list(allowed_values)),
            f"values outside {sorted(allowed_values)}",
            severity,
        )

    def add_referential_integrity_check(
        self,
        column: str,
        reference_df: pl.DataFrame,
        reference_column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Values of `column` must appear in `reference_df[reference_column]`."""
        known = reference_df[reference_column].unique().to_list()
        col = pl.col(column)
        return self._add(
            f"ref_integrity_{column}",
            column,
            col.is_not_null() & ~col.is_in(known),
            "orphan records",
            severity,
        )

    def validate(self, df: pl.DataFrame) -> ValidationResult:
        """Run every rule against `df`."""
        logger.debug("Running validation checks", checks=len(self._rules), rows=df.height)

        result = ValidationResult(checks=[rule.run(df) for rule in self._rules])

        for check in result.failures:
            logger.warning(
                "Validation check failed",
                check=check.name,
                message=check.message,
                severity=check.severity.value,
            )

        return result


# Pre-built validators for the storefront tables
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def create_customers_validator() -> DataValidator:
    return (
        DataValidator()
        .add_not_null_check("customer_id")
        .add_unique_check("customer_id")
        .add_not_null_check("first_name")
        .add_not_null_check("last_name")
        .add_not_null_check("email")
        .add_unique_check("email")
        .add_pattern_check("email", EMAIL_PATTERN, severity=ValidationSeverity.WARNING)
    )


def create_products_validator() -> DataValidator:
    return (
        DataValidator()
        .add_not_null_check("product_id")
        .add_unique_check("product_id")
        .add_not_null_check("product_name")
        .add_not_null_check("category")
        .add_not_null_check("price")
        .add_positive_check("price")
        .add_positive_check("stock_quantity")
    )


def create_orders_validator(customers: pl.DataFrame) -> DataValidator:
    """Orders must point at a seeded customer; unknown statuses only warn."""
    return (
        DataValidator()
        .add_not_null_check("order_id")
        .add_unique_check("order_id")
        .add_not_null_check("customer_id")
        .add_referential_integrity_check("customer_id", customers, "customer_id")
        .add_enum_check("status", ORDER_STATUSES, severity=ValidationSeverity.WARNING)
    )


def create_order_items_validator(orders: pl.DataFrame, products: pl.DataFrame) -> DataValidator:
    return (
        DataValidator()
        .add_not_null_check("order_item_id")
        .add_unique_check("order_item_id")
        .add_referential_integrity_check("order_id", orders, "order_id")
        .add_referential_integrity_check("product_id", products, "product_id")
        .add_positive_check("quantity", allow_zero=False)
        .add_positive_check("unit_price")
    )


def validate_frames(frames: Dict[str, pl.DataFrame]) -> Dict[str, ValidationResult]:
    """
    Validate a full set of storefront frames, parents first.

    Args:
        frames: Frames keyed by table name (customers, products, orders, order_items)

    Returns:
        Validation result per table
    """
    validators = {
        "customers": create_customers_validator(),
        "products": create_products_validator(),
        "orders": create_orders_validator(frames["customers"]),
        "order_items": create_order_items_validator(frames["orders"], frames["products"]),
    }

    results = {}
    for table_name, validator in validators.items():
        result = validator.validate(frames[table_name])
        results[table_name] = result
        logger.info(
            "Validation complete",
            table=table_name,
            status=result.status.value,
            passed=result.passed_checks,
            failed=result.failed_checks,
            warnings=result.warning_count,
        )

    return results
