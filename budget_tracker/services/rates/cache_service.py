from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Mapping, Optional

from budget_tracker.core.config import Settings
from budget_tracker.models.constants import CURRENCIES
from budget_tracker.models.rates import RateTable
from budget_tracker.services.http_client import HttpError
from .base import RateProvider
from .providers import make_rate_provider

"""Rate cache and periodic refresher.

Purpose:
    Hold the one exchange-rate table the rest of the application converts
    with, and keep it fresh.

Design:
    - Wraps a RateProvider (selected via settings.exchange_rate_provider).
    - The table is an immutable RateTable swapped by a single assignment, so
      readers see either the old table or the new one, never a mix.
    - Fetch failure installs the fallback table (every known currency -> 1),
      which turns conversion into a no-op instead of an error.
    - RateRefresher drives refresh_async() on a fixed interval; there is no
      retry backoff in between.
"""

logger = logging.getLogger("budget_tracker.rates")


def normalize_rates(raw: Mapping[str, object], base_currency: str) -> Dict[str, float]:
    """Coerce provider output and rescale so ``base_currency`` maps to 1."""
    base_currency = base_currency.upper()
    cleaned: Dict[str, float] = {}
    for code, value in raw.items():
        if isinstance(value, bool):
            continue
        try:
            rate = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            continue
        if rate > 0 and rate != float("inf"):
            cleaned[str(code).upper()] = rate
    base_rate = cleaned.get(base_currency)
    if base_rate and base_rate != 1.0:
        cleaned = {code: rate / base_rate for code, rate in cleaned.items()}
    cleaned[base_currency] = 1.0
    return cleaned


def fallback_rates(currencies: Iterable[str]) -> Dict[str, float]:
    return {code: 1.0 for code in currencies}


class RateCache:
    """Current exchange-rate table plus the logic to replace it."""

    def __init__(
        self,
        provider: RateProvider,
        base_currency: str = "USD",
        known_currencies: Iterable[str] = CURRENCIES,
    ):
        self._provider = provider
        self.base_currency = base_currency.upper()
        self._known = sorted(set(c.upper() for c in known_currencies) | {self.base_currency})
        self._table = RateTable(base_currency=self.base_currency)

    # Read side -----------------------------------------------
    @property
    def table(self) -> RateTable:
        return self._table

    @property
    def rates(self) -> Dict[str, float]:
        return self._table.rates

    # Internal --------------------------------------------------
    def _apply(self, raw: Optional[Mapping[str, object]], error: Optional[Exception]) -> RateTable:
        now = datetime.now(timezone.utc)
        rates = normalize_rates(raw, self.base_currency) if raw is not None else {}
        if error is not None or len(rates) <= 1:
            if error is not None:
                logger.warning("exchange rate fetch failed, using fallback table: %s", error)
            else:
                logger.warning("exchange rate provider returned no usable rates, using fallback table")
            table = RateTable(
                base_currency=self.base_currency,
                rates=fallback_rates(self._known),
                fetched_at=now,
                source="fallback",
            )
        else:
            table = RateTable(
                base_currency=self.base_currency,
                rates=rates,
                fetched_at=now,
                source="static" if self._provider.source == "static" else "remote",
            )
            logger.info("exchange rate table refreshed (%d currencies)", len(rates))
        self._table = table
        return table

    # Public API -----------------------------------------------
    def refresh(self) -> RateTable:
        """Fetch synchronously and install the resulting table."""
        try:
            raw = self._provider.fetch_rates()
        except (HttpError, ValueError) as e:
            return self._apply(None, e)
        return self._apply(raw, None)

    async def refresh_async(self) -> RateTable:
        """Fetch in a worker thread; the previous table stays live until it returns."""
        try:
            raw = await asyncio.to_thread(self._provider.fetch_rates)
        except (HttpError, ValueError) as e:
            return self._apply(None, e)
        return self._apply(raw, None)


class RateRefresher:
    """Periodic background refresh with a cancellation handle."""

    def __init__(self, cache: RateCache, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("refresh interval must be positive")
        self._cache = cache
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            try:
                await self._cache.refresh_async()
            except Exception:
                # Keep the schedule alive; the cache keeps its previous table.
                logger.exception("unexpected error during rate refresh")
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="rate-refresher")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


def build_rate_cache(settings: Settings) -> RateCache:
    provider = make_rate_provider(
        settings.exchange_rate_provider,
        url=settings.exchange_api_url,
        timeout=settings.http_timeout_seconds,
    )
    return RateCache(provider, base_currency=settings.base_currency)
