"""
Application Layer - Use Cases and Services

This package contains the rate lookup service that orchestrates the
upstream provider and the cache.
"""

from ezvrates.application.rates_service import (
    ExchangeRatesService,
    avg_month_cache_key,
    currencies_cache_key,
    rate_cache_key,
    record_cache_key,
)

__all__ = [
    "ExchangeRatesService",
    "rate_cache_key",
    "record_cache_key",
    "avg_month_cache_key",
    "currencies_cache_key",
]
