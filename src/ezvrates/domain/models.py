"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Rate queries and their cache keys
- Published rates and currency list entries
- Cache entries with expiry

Files that USE this module:
- ezvrates.application.rates_service (builds queries and keys)
- ezvrates.adapters.providers.ezv (creates RateRecord from XML)
- ezvrates.adapters.cache.* (stores CacheEntry)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass  # Decorator for creating data classes
from datetime import date, datetime  # Date/time utilities for query days and expiry
from typing import Any, Optional  # Type hints for optional values

DATE_FORMAT = "%Y%m%d"  # Upstream day parameter and cache key format


@dataclass(frozen=True)
class RateQuery:
    """
    Lookup of one currency on one day.

    Attributes:
        currency: Uppercase 3-letter currency code
        day: Requested day, or None for today
    """
    currency: str
    day: Optional[date] = None

    def resolved_day(self, today: date) -> date:
        return self.day if self.day is not None else today

    def is_today(self, today: date) -> bool:
        """True when the query should hit the default (undated) endpoint."""
        return self.day is None or self.day == today

    def cache_key(self, today: date, prefix: str = "rate") -> str:
        return f"{prefix}:{self.currency}:{self.resolved_day(today).strftime(DATE_FORMAT)}"


@dataclass(frozen=True)
class RateRecord:
    """
    Exchange rate of one currency against the Swiss Franc.

    Attributes:
        currency: Uppercase 3-letter currency code
        rate: CHF per `base_unit` units of the currency
        base_unit: Multiplier the rate is quoted for (1, 100, ...)
    """
    currency: str
    rate: float
    base_unit: int = 1


@dataclass(frozen=True)
class CurrencyListEntry:
    """A currency published upstream with its base-unit multiplier."""
    currency: str
    base_unit: int


@dataclass(frozen=True)
class CacheEntry:
    """
    Value held by a cache store.

    Attributes:
        key: Deterministic key derived from query parameters
        value: Cached rate, record or currency list
        expires_at: UTC time after which the entry is stale
    """
    key: str
    value: Any
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
