"""
Domain Layer - Pure Business Objects

This package contains domain models and errors.
No dependencies on infrastructure or external systems.
"""

from ezvrates.domain.models import (
    CacheEntry,
    CurrencyListEntry,
    RateQuery,
    RateRecord,
)
from ezvrates.domain.errors import (
    CurrencyNotFoundError,
    DomainError,
    FetchError,
    InvalidCurrencyCodeError,
)

__all__ = [
    "RateQuery",
    "RateRecord",
    "CurrencyListEntry",
    "CacheEntry",
    "DomainError",
    "FetchError",
    "CurrencyNotFoundError",
    "InvalidCurrencyCodeError",
]
