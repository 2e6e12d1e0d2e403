import asyncio
import http.client
import threading
import urllib.request

import pytest

from budget_tracker.models.constants import CURRENCIES
from budget_tracker.services.http_client import HttpError, get_json
from budget_tracker.services.rates.base import RateProvider
from budget_tracker.services.rates.cache_service import (
    RateCache,
    RateRefresher,
    normalize_rates,
)
from budget_tracker.services.rates.providers import (
    ExternalHTTPRateProvider,
    StaticRateProvider,
    make_rate_provider,
)


class FailingProvider(RateProvider):
    def __init__(self):
        self.calls = 0

    def fetch_rates(self):
        self.calls += 1
        raise HttpError("service down")


class GatedProvider(RateProvider):
    def __init__(self, rates):
        self.rates = rates
        self.gate = threading.Event()
        self.started = threading.Event()

    def fetch_rates(self):
        self.started.set()
        self.gate.wait(timeout=5)
        return self.rates


class CountingProvider(RateProvider):
    def __init__(self):
        self.calls = 0

    def fetch_rates(self):
        self.calls += 1
        return {"USD": 1.0, "EUR": 0.9}


def test_starts_empty_so_conversion_is_noop():
    cache = RateCache(StaticRateProvider())
    assert cache.rates == {}
    assert cache.table.source == "empty"


def test_refresh_installs_normalized_table():
    cache = RateCache(StaticRateProvider({"USD": 1.0, "EUR": 0.9}))
    table = cache.refresh()
    assert table.rates == {"USD": 1.0, "EUR": 0.9}
    assert table.source == "static"
    assert table.fetched_at is not None
    assert cache.table is table


def test_normalize_rescales_to_base_and_drops_junk():
    rates = normalize_rates(
        {"usd": 2.0, "EUR": 1.8, "BAD": "x", "ZERO": 0, "NEG": -1, "FLAG": True},
        "USD",
    )
    assert rates == {"USD": 1.0, "EUR": pytest.approx(0.9)}


def test_normalize_adds_missing_base():
    assert normalize_rates({"EUR": 0.9}, "USD") == {"EUR": 0.9, "USD": 1.0}


def test_failure_substitutes_identity_fallback():
    cache = RateCache(FailingProvider())
    table = cache.refresh()
    assert table.source == "fallback"
    assert set(table.rates) == set(CURRENCIES)
    assert all(rate == 1.0 for rate in table.rates.values())


def test_empty_provider_payload_uses_fallback():
    cache = RateCache(StaticRateProvider({}))
    assert cache.refresh().source == "fallback"


def test_previous_table_stays_live_while_fetch_outstanding():
    provider = GatedProvider({"USD": 1.0, "EUR": 0.5})
    cache = RateCache(provider)

    async def scenario():
        before = cache.table
        task = asyncio.create_task(cache.refresh_async())
        while not provider.started.is_set():
            await asyncio.sleep(0.01)
        assert cache.table is before
        provider.gate.set()
        return await task

    table = asyncio.run(scenario())
    assert cache.table is table
    assert table.rates["EUR"] == 0.5


def test_async_failure_uses_fallback():
    cache = RateCache(FailingProvider())
    assert asyncio.run(cache.refresh_async()).source == "fallback"


def test_refresher_fetches_on_start_and_stops_cleanly():
    provider = CountingProvider()
    cache = RateCache(provider)
    refresher = RateRefresher(cache, interval_seconds=3600)

    async def scenario():
        refresher.start()
        assert refresher.running
        for _ in range(200):
            if provider.calls:
                break
            await asyncio.sleep(0.01)
        await refresher.stop()

    asyncio.run(scenario())
    assert provider.calls == 1
    assert not refresher.running
    assert cache.table.rates["EUR"] == 0.9


def test_refresher_repeats_on_interval():
    provider = CountingProvider()
    refresher = RateRefresher(RateCache(provider), interval_seconds=0.01)

    async def scenario():
        refresher.start()
        for _ in range(200):
            if provider.calls >= 3:
                break
            await asyncio.sleep(0.01)
        await refresher.stop()

    asyncio.run(scenario())
    assert provider.calls >= 3


def test_refresher_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        RateRefresher(RateCache(StaticRateProvider()), interval_seconds=0)


def test_provider_factory():
    assert isinstance(make_rate_provider("static"), StaticRateProvider)
    http = make_rate_provider("external-http", url="https://example.invalid/latest/USD")
    assert isinstance(http, ExternalHTTPRateProvider)
    with pytest.raises(ValueError):
        make_rate_provider("external-http")
    with pytest.raises(ValueError):
        make_rate_provider("carrier-pigeon")


def test_external_provider_reads_rates_key(monkeypatch):
    from budget_tracker.services.rates import providers

    monkeypatch.setattr(
        providers,
        "get_json",
        lambda url, timeout: {"base": "USD", "rates": {"USD": 1, "EUR": 0.9}},
    )
    provider = ExternalHTTPRateProvider("https://example.invalid/latest/USD")
    assert provider.fetch_rates() == {"USD": 1, "EUR": 0.9}


def test_external_provider_without_rates_fails_soft(monkeypatch):
    from budget_tracker.services.rates import providers

    monkeypatch.setattr(providers, "get_json", lambda url, timeout: {"result": "error"})
    cache = RateCache(ExternalHTTPRateProvider("https://example.invalid/latest/USD"))
    assert cache.refresh().source == "fallback"


def _refuse_connection(exc):
    def fake_urlopen(url, timeout=None):
        raise exc

    return fake_urlopen


@pytest.mark.parametrize(
    "exc",
    [
        http.client.RemoteDisconnected("Remote end closed connection without response"),
        ConnectionResetError(104, "Connection reset by peer"),
        http.client.IncompleteRead(b"{\"rates\":"),
    ],
)
def test_get_json_wraps_transport_errors(monkeypatch, exc):
    monkeypatch.setattr(urllib.request, "urlopen", _refuse_connection(exc))
    with pytest.raises(HttpError):
        get_json("https://example.invalid/latest/USD")


def test_transport_error_installs_fallback_everywhere(monkeypatch):
    monkeypatch.setattr(
        urllib.request,
        "urlopen",
        _refuse_connection(http.client.RemoteDisconnected("closed")),
    )
    url = "https://example.invalid/latest/USD"

    assert RateCache(ExternalHTTPRateProvider(url)).refresh().source == "fallback"
    assert asyncio.run(RateCache(ExternalHTTPRateProvider(url)).refresh_async()).source == "fallback"

    cache = RateCache(ExternalHTTPRateProvider(url))
    refresher = RateRefresher(cache, interval_seconds=3600)

    async def scenario():
        refresher.start()
        for _ in range(200):
            if cache.table.source != "empty":
                break
            await asyncio.sleep(0.01)
        await refresher.stop()

    asyncio.run(scenario())
    assert cache.table.source == "fallback"
