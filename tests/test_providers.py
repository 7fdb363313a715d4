# tests/test_providers.py
"""
Provider Tests - Unit Tests for the Customs XML Provider

This module tests EzvProvider: request construction (URL variants, Accept
header, timeout), XML parsing into RateRecord objects, and the mapping of
transport and parse failures to FetchError.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- ezvrates.adapters.providers.ezv (EzvProvider for testing)
- unittest.mock (Mock for API mocking)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from datetime import date  # Requested days
from unittest.mock import Mock, patch  # Mock objects and patching for testing without real API calls
import requests  # HTTP library (used for mocking failures)

from conftest import AVG_MONTH_XML, DAILY_XML, EMPTY_XML, TRUNCATED_XML, xml_response
from ezvrates.adapters.providers.ezv import EzvProvider
from ezvrates.domain.errors import FetchError
from ezvrates.domain.models import CurrencyListEntry, RateRecord

DAILY_URL = "https://rates.test/api/xmldaily"
AVG_URL = "https://rates.test/api/xmlavgmonth"


def _provider(**kwargs) -> EzvProvider:
    return EzvProvider(daily_url=DAILY_URL, avg_month_url=AVG_URL, timeout=5, **kwargs)


class TestEzvProviderInit:
    def test_init_with_defaults(self):
        provider = EzvProvider()
        assert provider.daily_url.endswith("/api/xmldaily")
        assert provider.avg_month_url.endswith("/api/xmlavgmonth")
        assert provider.timeout >= 1
        assert provider.session is None

    def test_init_with_custom_params(self):
        provider = _provider()
        assert provider.daily_url == DAILY_URL
        assert provider.avg_month_url == AVG_URL
        assert provider.timeout == 5


class TestParseRates:
    def test_parses_all_entries(self):
        records = EzvProvider.parse_rates(DAILY_XML)
        assert [r.currency for r in records] == ["USD", "EUR", "JPY", "GBP"]
        assert RateRecord(currency="EUR", rate=1.07474, base_unit=1) in records

    def test_base_unit_from_unit_field(self):
        records = {r.currency: r for r in EzvProvider.parse_rates(DAILY_XML)}
        assert records["JPY"].base_unit == 100
        assert records["JPY"].rate == pytest.approx(0.89157)

    def test_accepts_text_documents(self):
        xml = '<wechselkurse><devise code="chf"><waehrung>1 CHF</waehrung><kurs>1</kurs></devise></wechselkurse>'
        assert EzvProvider.parse_rates(xml) == [RateRecord(currency="CHF", rate=1.0, base_unit=1)]

    def test_empty_document_yields_no_records(self):
        assert EzvProvider.parse_rates(EMPTY_XML) == []

    def test_entries_without_code_are_skipped(self):
        xml = "<wechselkurse><devise><kurs>1.0</kurs></devise></wechselkurse>"
        assert EzvProvider.parse_rates(xml) == []

    def test_missing_unit_gives_zero_base_unit(self):
        xml = '<wechselkurse><devise code="eur"><kurs>1.07</kurs></devise></wechselkurse>'
        assert EzvProvider.parse_rates(xml)[0].base_unit == 0

    def test_non_numeric_rate_raises(self):
        xml = '<wechselkurse><devise code="eur"><waehrung>1 EUR</waehrung><kurs>n/a</kurs></devise></wechselkurse>'
        with pytest.raises(FetchError, match="schema error for eur"):
            EzvProvider.parse_rates(xml)

    def test_missing_rate_raises(self):
        xml = '<wechselkurse><devise code="eur"><waehrung>1 EUR</waehrung></devise></wechselkurse>'
        with pytest.raises(FetchError, match="has no rate"):
            EzvProvider.parse_rates(xml)

    def test_unparsable_document_raises(self):
        with pytest.raises(FetchError, match="unparsable XML"):
            EzvProvider.parse_rates("")

    def test_truncated_document_raises(self):
        with pytest.raises(FetchError, match="unparsable XML"):
            EzvProvider.parse_rates(TRUNCATED_XML)

    def test_html_page_raises(self):
        html = b"<html><body><h1>Wartungsarbeiten</h1></body></html>"
        with pytest.raises(FetchError, match="unexpected <html> document"):
            EzvProvider.parse_rates(html)

    def test_monthly_average_root_is_accepted(self):
        assert len(EzvProvider.parse_rates(AVG_MONTH_XML)) == 2


class TestDailyRates:
    @patch('ezvrates.adapters.providers.ezv.requests.get')
    def test_today_uses_undated_endpoint(self, mock_get):
        mock_get.return_value = xml_response(DAILY_XML)

        records = _provider().daily_rates()

        assert len(records) == 4
        mock_get.assert_called_once_with(
            DAILY_URL,
            params=None,
            headers={"Accept": "application/xml"},
            timeout=5,
        )

    @patch('ezvrates.adapters.providers.ezv.requests.get')
    def test_specific_day_sends_date_parameter(self, mock_get):
        mock_get.return_value = xml_response(DAILY_XML)

        _provider().daily_rates(date(2020, 6, 28))

        _, kwargs = mock_get.call_args
        assert kwargs["params"] == {"d": "20200628"}
        assert kwargs["headers"] == {"Accept": "application/xml"}

    @patch('ezvrates.adapters.providers.ezv.requests.get')
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()

        with pytest.raises(FetchError, match="timeout after 5s"):
            _provider().daily_rates()

    @patch('ezvrates.adapters.providers.ezv.requests.get')
    def test_connection_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(FetchError, match="request failed") as excinfo:
            _provider().daily_rates()
        assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)

    @patch('ezvrates.adapters.providers.ezv.requests.get')
    def test_http_error(self, mock_get):
        response = xml_response(b"")
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("503 Server Error")
        mock_get.return_value = response

        with pytest.raises(FetchError, match="HTTP error"):
            _provider().daily_rates()

    @patch('ezvrates.adapters.providers.ezv.requests.get')
    def test_empty_body(self, mock_get):
        mock_get.return_value = xml_response(b"  \n")

        with pytest.raises(FetchError, match="empty body"):
            _provider().daily_rates()

    def test_uses_injected_session(self):
        session = Mock()
        session.get.return_value = xml_response(DAILY_XML)

        _provider(session=session).daily_rates()

        session.get.assert_called_once()
        assert session.get.call_args[0][0] == DAILY_URL


class TestMonthlyAverageAndList:
    @patch('ezvrates.adapters.providers.ezv.requests.get')
    def test_monthly_average_endpoint(self, mock_get):
        mock_get.return_value = xml_response(AVG_MONTH_XML)

        records = _provider().monthly_average_rates()

        assert [r.currency for r in records] == ["EUR", "USD"]
        assert mock_get.call_args[0][0] == AVG_URL
        assert mock_get.call_args[1]["params"] is None

    @patch('ezvrates.adapters.providers.ezv.requests.get')
    def test_currency_list(self, mock_get):
        mock_get.return_value = xml_response(DAILY_XML)

        entries = _provider().currency_list()

        assert CurrencyListEntry(currency="JPY", base_unit=100) in entries
        assert CurrencyListEntry(currency="EUR", base_unit=1) in entries
        assert mock_get.call_args[1]["params"] is None
