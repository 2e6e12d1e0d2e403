"""Display preferences persisted in local storage.

Keys:
  - budgetCurrency: display currency code (default from settings)
  - darkMode: "enabled" | "disabled" (default disabled)
"""

from __future__ import annotations

from budget_tracker.db.storage import LocalStorage
from budget_tracker.models.constants import (
    CURRENCIES,
    CURRENCY_KEY,
    DARK_MODE_DISABLED,
    DARK_MODE_ENABLED,
    DARK_MODE_KEY,
)

MODES = {"light", "dark"}


class Preferences:
    def __init__(self, storage: LocalStorage, default_currency: str = "USD"):
        self._storage = storage
        self.default_currency = default_currency.upper()
        stored = storage.load_primitive(CURRENCY_KEY, self.default_currency).upper()
        self._currency = stored if stored in CURRENCIES else self.default_currency
        self._dark = (
            storage.load_primitive(DARK_MODE_KEY, DARK_MODE_DISABLED) == DARK_MODE_ENABLED
        )

    @property
    def display_currency(self) -> str:
        return self._currency

    def set_display_currency(self, currency: str) -> str:
        code = currency.strip().upper()
        if code not in CURRENCIES:
            raise ValueError(f"unsupported currency '{currency}'")
        self._currency = code
        self._storage.save_primitive(CURRENCY_KEY, code)
        return code

    @property
    def dark_mode(self) -> bool:
        return self._dark

    @property
    def mode(self) -> str:
        return "dark" if self._dark else "light"

    def _set_dark(self, enabled: bool) -> bool:
        self._dark = enabled
        self._storage.save_primitive(
            DARK_MODE_KEY, DARK_MODE_ENABLED if enabled else DARK_MODE_DISABLED
        )
        return enabled

    def toggle_dark_mode(self) -> bool:
        return self._set_dark(not self._dark)

    def set_mode(self, mode: str) -> str:
        if mode not in MODES:
            raise ValueError(f"unsupported mode '{mode}'")
        self._set_dark(mode == "dark")
        return self.mode
