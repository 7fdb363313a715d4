"""
Shared Test Fixtures

Sample upstream XML documents and a counting fake RateSource used across
the provider, service and command line tests.
"""
from datetime import date
from typing import List, Optional
from unittest.mock import Mock

import pytest

from ezvrates.adapters.providers.base import RateSource
from ezvrates.adapters.providers.ezv import EzvProvider
from ezvrates.domain.models import RateRecord

DAILY_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<wechselkurse xmlns="https://www.backend-rates.bazg.admin.ch/xmldaily" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <datum>28.06.2020</datum>
  <zeit>00:00:00</zeit>
  <gueltigkeit>28.06.2020</gueltigkeit>
  <devise code="usd">
    <land_de>Vereinigte Staaten</land_de>
    <waehrung>1 USD</waehrung>
    <kurs>0.95841</kurs>
  </devise>
  <devise code="eur">
    <land_de>Europ\xc3\xa4ische W\xc3\xa4hrungsunion</land_de>
    <waehrung>1 EUR</waehrung>
    <kurs>1.07474</kurs>
  </devise>
  <devise code="jpy">
    <land_de>Japan</land_de>
    <waehrung>100 JPY</waehrung>
    <kurs>0.89157</kurs>
  </devise>
  <devise code="gbp">
    <land_de>Grossbritannien</land_de>
    <waehrung>1 GBP</waehrung>
    <kurs>1.18552</kurs>
  </devise>
</wechselkurse>
"""

AVG_MONTH_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<monatsmittelkurse>
  <devise code="eur">
    <waehrung>1 EUR</waehrung>
    <kurs>1.06911</kurs>
  </devise>
  <devise code="usd">
    <waehrung>1 USD</waehrung>
    <kurs>0.94876</kurs>
  </devise>
</monatsmittelkurse>
"""

EMPTY_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<wechselkurse></wechselkurse>
"""

TRUNCATED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<wechselkurse>
  <devise code="usd">
    <waehrung>1 USD</waehrung>
    <kurs>0.95841</kurs>
  </devise>
  <devise code="eu"""


def xml_response(body: bytes) -> Mock:
    """Mock requests.Response carrying body."""
    response = Mock()
    response.content = body
    response.raise_for_status.return_value = None
    return response


class FakeSource(RateSource):
    """RateSource backed by the sample documents, counting upstream calls."""

    def __init__(self, daily: bytes = DAILY_XML, avg_month: bytes = AVG_MONTH_XML):
        self.daily = daily
        self.avg_month = avg_month
        self.daily_calls: List[Optional[date]] = []
        self.avg_month_calls = 0

    def daily_rates(self, day: Optional[date] = None) -> List[RateRecord]:
        self.daily_calls.append(day)
        return EzvProvider.parse_rates(self.daily)

    def monthly_average_rates(self) -> List[RateRecord]:
        self.avg_month_calls += 1
        return EzvProvider.parse_rates(self.avg_month)


@pytest.fixture
def fake_source():
    return FakeSource()
