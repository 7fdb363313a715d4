"""
Provider Adapters - External API Clients

This package contains adapters for upstream exchange rate APIs.
All providers implement the RateSource interface.
"""

from ezvrates.adapters.providers.base import RateSource
from ezvrates.adapters.providers.ezv import EzvProvider

__all__ = [
    "RateSource",
    "EzvProvider",
]
