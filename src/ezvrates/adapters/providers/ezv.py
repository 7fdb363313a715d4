"""
EZV / BAZG XML Provider for CHF Exchange Rates

This module implements the client for the Swiss customs exchange rate
backend. It performs the HTTP GET, parses the XML answer and converts each
<devise> entry into a RateRecord. Caching is not done here; the rates
service wraps calls in the injected cache.

Files that USE this module:
- ezvrates.application.rates_service (default RateSource)
- tests.test_providers (unit tests)

Files that this module USES:
- ezvrates.adapters.providers.base (RateSource interface)
- ezvrates.config (settings for endpoint URLs and timeout)
- ezvrates.shared.validators (parse_base_unit)
"""
import logging
from datetime import date
from typing import List, Optional, Union

import requests
from bs4 import BeautifulSoup
from lxml import etree

from ezvrates.adapters.providers.base import RateSource
from ezvrates.config import settings
from ezvrates.domain.errors import FetchError
from ezvrates.domain.models import DATE_FORMAT, RateRecord
from ezvrates.shared.validators import parse_base_unit

log = logging.getLogger(__name__)

# XML vocabulary of the upstream documents
ENTRY_TAG = "devise"
CODE_ATTR = "code"
RATE_TAG = "kurs"
UNIT_TAG = "waehrung"
ROOT_TAGS = ("wechselkurse", "monatsmittelkurse")

DAY_PARAM = "d"


class EzvProvider(RateSource):
    """
    Client for the 'xmldaily' and 'xmlavgmonth' endpoints.

    A document looks like:
      <wechselkurse ...>
        <devise code="eur">
          <land_de>Europäische Währungsunion</land_de>
          <waehrung>1 EUR</waehrung>
          <kurs>1.07474</kurs>
        </devise>
        ...
      </wechselkurse>
    """

    def __init__(
        self,
        daily_url: Optional[str] = None,
        avg_month_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the provider.

        Args:
            daily_url: Optional daily endpoint (defaults to settings.daily_url)
            avg_month_url: Optional monthly average endpoint (defaults to settings.avg_month_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            session: Optional requests session; module-level requests.get is used otherwise
        """
        self.daily_url = daily_url or settings.daily_url
        self.avg_month_url = avg_month_url or settings.avg_month_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.session = session

    def _get(self, url: str, params: Optional[dict] = None) -> bytes:
        """
        Perform the GET request and return the raw response body.

        Raises:
            FetchError: On timeout, connection failure, non-2xx status or empty body
        """
        getter = self.session.get if self.session is not None else requests.get
        try:
            log.info("Fetching exchange rates from %s params=%s", url, params)
            resp = getter(
                url,
                params=params,
                headers={"Accept": "application/xml"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            log.error("Rates API timeout after %d seconds", self.timeout)
            raise FetchError(f"Rates API timeout after {self.timeout}s") from e
        except requests.exceptions.HTTPError as e:
            log.error("Rates API HTTP error: %s", e)
            raise FetchError(f"Rates API HTTP error: {e}") from e
        except requests.exceptions.RequestException as e:
            log.error("Rates API request failed: %s", e)
            raise FetchError(f"Rates API request failed: {e}") from e

        body = resp.content
        if not body or not body.strip():
            log.error("Rates API returned an empty body")
            raise FetchError("Rates API returned an empty body")
        return body

    @staticmethod
    def parse_rates(xml: Union[str, bytes]) -> List[RateRecord]:
        """
        Parse an upstream XML document into rate records.

        Entries without a code are skipped. A present but unreadable rate is
        a schema error.

        Raises:
            FetchError: If the document is not well-formed, is not a rate
                document, or a rate is not numeric
        """
        if isinstance(xml, str):
            xml = xml.encode("utf-8")
        try:
            root = etree.fromstring(xml, etree.XMLParser(recover=False, resolve_entities=False))
        except etree.XMLSyntaxError as e:
            log.error("Rates API returned unparsable XML: %s", e)
            raise FetchError(f"Rates API returned unparsable XML: {e}") from e

        root_name = etree.QName(root).localname
        if root_name not in ROOT_TAGS:
            log.error("Rates API returned a <%s> document instead of rates", root_name)
            raise FetchError(f"Rates API returned unexpected <{root_name}> document")

        soup = BeautifulSoup(xml, "xml")

        records: List[RateRecord] = []
        for node in soup.find_all(ENTRY_TAG):
            code = node.get(CODE_ATTR)
            if not code:
                continue
            rate_node = node.find(RATE_TAG)
            unit_node = node.find(UNIT_TAG)
            try:
                rate = float(rate_node.get_text(strip=True)) if rate_node is not None else None
            except ValueError as e:
                log.error("Rates API unexpected rate for %s: %r", code, rate_node.get_text())
                raise FetchError(f"Rates API schema error for {code}: {e}") from e
            if rate is None:
                log.error("Rates API entry %s has no <%s> element", code, RATE_TAG)
                raise FetchError(f"Rates API schema error: {code} has no rate")
            base_unit = parse_base_unit(unit_node.get_text() if unit_node is not None else None)
            records.append(RateRecord(
                currency=code.strip().upper(),
                rate=rate,
                base_unit=base_unit if base_unit is not None else 0,
            ))
        log.debug("Parsed %d rate entries", len(records))
        return records

    def daily_rates(self, day: Optional[date] = None) -> List[RateRecord]:
        """
        Get the published daily rates.

        Args:
            day: Specific day, or None for the undated (today) endpoint.
                 Upstream answers weekends/holidays with the latest prior rate.
        """
        params = {DAY_PARAM: day.strftime(DATE_FORMAT)} if day is not None else None
        return self.parse_rates(self._get(self.daily_url, params))

    def monthly_average_rates(self) -> List[RateRecord]:
        """Get the current monthly average rates."""
        return self.parse_rates(self._get(self.avg_month_url))

