"""Application state owner.

BudgetTracker holds every piece of mutable state (entry store, preferences,
staged form, filter selection, rate cache) and hands it explicitly to the
pure derivations in entry_view and summary. Routes talk to one instance
stored on ``app.state``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import Request

from budget_tracker.core.config import Settings
from budget_tracker.db.storage import LocalStorage
from budget_tracker.models.constants import FILTER_ALL, FILTERS
from budget_tracker.models.entry import Entry, EntryFormValues, EntryRow
from budget_tracker.models.summary import Summary
from .entry_store import EntryStore
from .entry_view import present_entry, visible_entries
from .form_controller import FormController
from .preferences import Preferences
from .rates.cache_service import RateCache, build_rate_cache
from .summary import summarize

logger = logging.getLogger("budget_tracker.tracker")


class BudgetTracker:
    def __init__(
        self,
        storage: LocalStorage,
        rate_cache: RateCache,
        default_currency: str = "USD",
    ):
        self.storage = storage
        self.rate_cache = rate_cache
        self.store = EntryStore(storage)
        self.preferences = Preferences(storage, default_currency=default_currency)
        self.form = FormController()
        self._filter = FILTER_ALL

    # Filter selection -----------------------------------------
    @property
    def current_filter(self) -> str:
        return self._filter

    def set_filter(self, selection: str) -> str:
        if selection not in FILTERS:
            raise ValueError(f"unsupported filter '{selection}'")
        self._filter = selection
        return selection

    # Derivations ----------------------------------------------
    def entries_view(self, selection: Optional[str] = None) -> List[EntryRow]:
        table = self.rate_cache.table
        currency = self.preferences.display_currency
        return [
            present_entry(e, currency, table.rates, table.base_currency)
            for e in visible_entries(self.store.list(), selection or self._filter)
        ]

    def summary(self) -> Summary:
        table = self.rate_cache.table
        return summarize(
            self.store.list(),
            self.preferences.display_currency,
            table.rates,
            table.base_currency,
        )

    # Form -----------------------------------------------------
    def update_form(self, **fields: object) -> EntryFormValues:
        return self.form.update(**fields)

    def submit_form(self, now: Optional[datetime] = None) -> Optional[Entry]:
        return self.form.submit(self.store, now=now)

    def begin_edit(self, entry_id: int) -> bool:
        entry = self.store.get(entry_id)
        if entry is None:
            return False
        self.form.begin_edit(entry)
        return True

    def cancel_edit(self) -> None:
        self.form.cancel_edit()

    # Delete ---------------------------------------------------
    def delete_entry(self, entry_id: int, confirmed: bool = False) -> bool:
        """Remove an entry; unconfirmed requests change nothing."""
        if not confirmed:
            logger.debug("delete of %s not confirmed", entry_id)
            return False
        removed = self.store.delete(entry_id)
        if removed:
            logger.info("deleted entry %s", entry_id)
        return removed


def build_tracker(settings: Settings) -> BudgetTracker:
    return BudgetTracker(
        LocalStorage(settings.db_path),  # type: ignore[arg-type]
        build_rate_cache(settings),
        default_currency=settings.default_display_currency,
    )


def get_tracker(request: Request) -> BudgetTracker:
    """FastAPI dependency returning the app's single tracker instance."""
    return request.app.state.tracker
