"""
Data Quality Module
"""
from .validators import (
    DataValidator,
    SeedValidationError,
    ValidationResult,
    ValidationStatus,
    validate_frames,
)

__all__ = [
    "DataValidator",
    "SeedValidationError",
    "ValidationResult",
    "ValidationStatus",
    "validate_frames",
]
