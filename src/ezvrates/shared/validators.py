"""
Input Validation Utilities - Currency Codes, Dates and Settings

This module provides validation and normalisation helpers for user input
(currency codes, dates typed on the command line) and for configuration
values checked by Settings.

Files that USE this module:
- ezvrates.config.settings (validate_timezone in a field validator)
- ezvrates.application.rates_service (normalize_currency_code)
- ezvrates.app (parse_date for the --date option)

Files that this module USES:
- ezvrates.domain.errors (InvalidCurrencyCodeError)
"""
import re
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ezvrates.domain.errors import InvalidCurrencyCodeError

_CURRENCY_RE = re.compile(r'^[A-Za-z]{3}$')


def validate_currency_code(code: Optional[str]) -> bool:
    """
    Validate a currency code (three ASCII letters, any case).

    Args:
        code: Currency code to validate

    Returns:
        True if valid, False otherwise
    """
    if not code or not isinstance(code, str):
        return False
    return bool(_CURRENCY_RE.match(code.strip()))


def normalize_currency_code(code: str) -> str:
    """
    Normalise a currency code to uppercase.

    Raises:
        InvalidCurrencyCodeError: If the code is not three letters
    """
    if not validate_currency_code(code):
        raise InvalidCurrencyCodeError(f"Invalid currency code: {code!r}")
    return code.strip().upper()


def validate_timezone(name: str) -> bool:
    """Check that name is a known IANA time zone."""
    if not name:
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def parse_date(value: str) -> date:
    """
    Parse a day given as YYYY-MM-DD or YYYYMMDD.

    Raises:
        ValueError: If the value matches neither format
    """
    value = value.strip()
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_base_unit(text: Optional[str]) -> Optional[int]:
    """
    Extract the leading multiplier from an upstream unit field.

    '1 EUR' -> 1, '100 JPY' -> 100, '' -> None
    """
    if not text:
        return None
    match = re.match(r'\s*(\d+)', text)
    return int(match.group(1)) if match else None
