"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from ezvrates.shared.validators import (
    normalize_currency_code,
    parse_base_unit,
    parse_date,
    validate_currency_code,
    validate_timezone,
)

__all__ = [
    "validate_currency_code",
    "normalize_currency_code",
    "validate_timezone",
    "parse_date",
    "parse_base_unit",
]
