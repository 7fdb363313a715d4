"""
EZV Rates - Swiss Customs Exchange Rates Client

Fetches the CHF exchange rates published as XML by the Swiss Federal Office
for Customs and Border Security and caches them for one week.
"""

__version__ = "1.0.0"
