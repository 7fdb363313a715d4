"""
Rates Service - Business Logic for Exchange Rate Lookups

This module contains the lookup facade over the customs rate backend. It
normalises the currency, decides which endpoint variant to call, runs the
fetch directly or through the cache, and extracts the requested value.

Files that USE this module:
- ezvrates.app (command line commands)
- tests.test_rates_service (unit tests)

Files that this module USES:
- ezvrates.adapters.providers.ezv (EzvProvider as the default RateSource)
- ezvrates.adapters.cache (build_cache for the default cache store)
- ezvrates.domain.models (RateQuery, RateRecord)
- ezvrates.shared.validators (normalize_currency_code)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, Optional, TypeVar
from zoneinfo import ZoneInfo

from ezvrates.adapters.cache import RateCache, build_cache
from ezvrates.adapters.providers.base import RateSource
from ezvrates.adapters.providers.ezv import EzvProvider
from ezvrates.config import settings
from ezvrates.domain.errors import CurrencyNotFoundError
from ezvrates.domain.models import RateQuery, RateRecord
from ezvrates.shared.validators import normalize_currency_code

log = logging.getLogger(__name__)

T = TypeVar("T")

CURRENCIES_KEY = "currencies"


def rate_cache_key(currency: str, day: date) -> str:
    """Key of a single rate, e.g. 'rate:EUR:20200628'."""
    return RateQuery(normalize_currency_code(currency), day).cache_key(day)


def record_cache_key(currency: str, day: date) -> str:
    return RateQuery(normalize_currency_code(currency), day).cache_key(day, prefix="record")


def avg_month_cache_key(currency: str, day: date) -> str:
    """Key of a monthly average, one per calendar month."""
    return f"avgmonth:{normalize_currency_code(currency)}:{day.strftime('%Y%m')}"


def currencies_cache_key() -> str:
    return CURRENCIES_KEY


def find_rate(records: Iterable[RateRecord], currency: str) -> RateRecord:
    """
    Pick the record for currency out of a parsed document.

    Raises:
        CurrencyNotFoundError: If no record carries that code
    """
    for record in records:
        if record.currency == currency:
            return record
    log.warning("Currency %s not present in upstream response", currency)
    raise CurrencyNotFoundError(currency)


class ExchangeRatesService:
    """
    Lookup facade for CHF exchange rates with a one-week cache.

    Both the upstream source and the cache are injected; defaults come from
    settings. Calls are stateless apart from the cache store.
    """

    def __init__(
        self,
        provider: Optional[RateSource] = None,
        cache: Optional[RateCache] = None,
        ttl: Optional[timedelta] = None,
        tz: Optional[str] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the rates service.

        Args:
            provider: RateSource to fetch from (defaults to EzvProvider())
            cache: Cache store with a remember() method (defaults to build_cache())
            ttl: Cache lifetime (defaults to settings.cache_ttl_days days)
            tz: Time zone deciding what "today" is (defaults to settings.timezone)
            today: Optional callable returning today's date, overrides tz
        """
        self.provider = provider if provider is not None else EzvProvider()
        self.cache = cache if cache is not None else build_cache()
        self.ttl = ttl if ttl is not None else timedelta(days=settings.cache_ttl_days)
        self.tz = ZoneInfo(tz or settings.timezone)
        self._today = today

    def today(self) -> date:
        if self._today is not None:
            return self._today()
        return datetime.now(self.tz).date()

    def _cached(self, key: str, use_cache: bool, producer: Callable[[], T]) -> T:
        if not use_cache:
            return producer()
        return self.cache.remember(key, self.ttl, producer)

    def _daily_record(self, query: RateQuery, today: date) -> RateRecord:
        day = None if query.is_today(today) else query.day
        return find_rate(self.provider.daily_rates(day), query.currency)

    def get_exchange_rate(
        self,
        currency: str,
        day: Optional[date] = None,
        use_cache: bool = True,
    ) -> float:
        """
        Get the rate of currency against CHF for day.

        Today (or day=None) uses the undated endpoint; any other day is sent
        as YYYYMMDD. On weekends and holidays upstream returns the latest
        earlier rate.

        Args:
            currency: Currency code, any case (e.g. 'eur', 'USD')
            day: Requested day, or None for today
            use_cache: Read and write the cache (key 'rate:{CURRENCY}:{YYYYMMDD}')

        Returns:
            CHF per base unit of the currency as float

        Raises:
            InvalidCurrencyCodeError: If currency is not three letters
            CurrencyNotFoundError: If upstream does not list the currency
            FetchError: On transport or XML errors
        """
        query = RateQuery(normalize_currency_code(currency), day)
        today = self.today()
        return self._cached(
            query.cache_key(today),
            use_cache,
            lambda: self._daily_record(query, today).rate,
        )

    def get_rate_record(
        self,
        currency: str,
        day: Optional[date] = None,
        use_cache: bool = True,
    ) -> RateRecord:
        """Same lookup as get_exchange_rate, returning rate and base unit."""
        query = RateQuery(normalize_currency_code(currency), day)
        today = self.today()

        def produce() -> dict:
            record = self._daily_record(query, today)
            return {"currency": record.currency, "rate": record.rate, "base_unit": record.base_unit}

        data = self._cached(query.cache_key(today, prefix="record"), use_cache, produce)
        return RateRecord(currency=data["currency"], rate=float(data["rate"]), base_unit=int(data["base_unit"]))

    def get_monthly_average_rate(self, currency: str, use_cache: bool = True) -> float:
        """
        Get the current monthly average rate of currency against CHF.

        Raises:
            CurrencyNotFoundError: If upstream does not list the currency
            FetchError: On transport or XML errors
        """
        code = normalize_currency_code(currency)
        return self._cached(
            avg_month_cache_key(code, self.today()),
            use_cache,
            lambda: find_rate(self.provider.monthly_average_rates(), code).rate,
        )

    def list_currencies(self, use_cache: bool = True) -> Dict[str, int]:
        """
        List today's currencies with their base-unit multipliers.

        Returns:
            Mapping of uppercase code to multiplier, sorted by code.
            Empty if upstream lists nothing.

        Raises:
            FetchError: On transport or XML errors
        """
        def produce() -> Dict[str, int]:
            currencies = {entry.currency: entry.base_unit for entry in self.provider.currency_list()}
            return dict(sorted(currencies.items()))

        result = self._cached(currencies_cache_key(), use_cache, produce)
        return dict(sorted(result.items()))
