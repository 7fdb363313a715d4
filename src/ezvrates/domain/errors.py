"""
Domain Errors - Business Logic Exceptions

This module defines the exceptions raised by rate lookups. Callers can catch
DomainError for everything, or the specific kinds below.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class FetchError(DomainError):
    """Raised when the upstream request fails or its XML cannot be parsed."""
    pass


class CurrencyNotFoundError(DomainError):
    """Raised when the requested currency is absent from the published rates."""

    def __init__(self, currency: str):
        super().__init__(f"Unable to find exchange rate for {currency}")
        self.currency = currency


class InvalidCurrencyCodeError(DomainError, ValueError):
    """Raised when a currency code is not three ASCII letters."""
    pass
