"""
Base Provider Interface for Exchange Rate Sources

This module defines the abstract base class for exchange rate sources.
The rates service depends on this contract only, so tests can substitute
a fake source.

Files that USE this module:
- ezvrates.adapters.providers.ezv (EzvProvider implements RateSource)
- ezvrates.application.rates_service (type of the injected provider)

Files that this module USES:
- ezvrates.domain.models (RateRecord, CurrencyListEntry)
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from ezvrates.domain.models import CurrencyListEntry, RateRecord


class RateSource(ABC):
    @abstractmethod
    def daily_rates(self, day: Optional[date] = None) -> List[RateRecord]:
        """Return all rates published for day (None = today's endpoint)."""
        raise NotImplementedError

    @abstractmethod
    def monthly_average_rates(self) -> List[RateRecord]:
        """Return the current monthly average rates."""
        raise NotImplementedError

    def currency_list(self) -> List[CurrencyListEntry]:
        """Return today's currencies with their base-unit multipliers."""
        return [
            CurrencyListEntry(currency=r.currency, base_unit=r.base_unit)
            for r in self.daily_rates()
        ]
