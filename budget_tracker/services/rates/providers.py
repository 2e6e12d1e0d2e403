from __future__ import annotations

"""Concrete rate providers and factory.

'StaticRateProvider' serves fixed placeholder values for offline use and
tests; 'ExternalHTTPRateProvider' reads the public endpoint configured in
settings.exchange_api_url.
"""
import logging
from typing import Dict, Mapping, Optional

from budget_tracker.services.http_client import get_json, HttpError
from .base import RateProvider

logger = logging.getLogger("budget_tracker.rates")

# Placeholder USD-relative values
_STATIC_RATES: Dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 149.5,
    "INR": 83.1,
    "CAD": 1.36,
    "AUD": 1.52,
    "CHF": 0.88,
    "CNY": 7.24,
    "SGD": 1.34,
}


class StaticRateProvider(RateProvider):
    source = "static"

    def __init__(self, rates: Optional[Mapping[str, float]] = None):
        self._rates = dict(rates if rates is not None else _STATIC_RATES)

    def fetch_rates(self) -> Mapping[str, object]:  # type: ignore[override]
        return dict(self._rates)


class ExternalHTTPRateProvider(RateProvider):
    """Provider for exchangerate-api style endpoints (free, no key required).

    Expected payload: ``{"base": "USD", "rates": {"EUR": 0.92, ...}}``.
    """

    source = "remote"

    def __init__(self, url: str, timeout: float = 5.0):
        self.url = url
        self.timeout = timeout

    def fetch_rates(self) -> Mapping[str, object]:  # type: ignore[override]
        data = get_json(self.url, timeout=self.timeout)
        rates = data.get("rates")
        if not isinstance(rates, dict) or not rates:
            raise HttpError(f"No rates in response from {self.url}")
        logger.debug("fetched %d rates from %s", len(rates), self.url)
        return rates


def make_rate_provider(kind: str, *, url: str = "", timeout: float = 5.0) -> RateProvider:
    if kind == "static":
        return StaticRateProvider()
    if kind == "external-http":
        if not url:
            raise ValueError("external-http provider requires a url")
        return ExternalHTTPRateProvider(url, timeout=timeout)
    raise ValueError(f"Unknown rate provider kind '{kind}'")
