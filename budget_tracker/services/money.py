"""Money / rounding and display helpers.

Centralized so summaries, entry rows, and rate endpoints use identical
rounding and formatting semantics.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP

from budget_tracker.models.constants import CURRENCY_SYMBOLS, ZERO_DECIMAL_CURRENCIES

DEFAULT_SYMBOL = "$"


def round2(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_currency(amount: float, currency: str) -> str:
    """Render ``amount`` with the currency's symbol, e.g. ``$12.50`` or ``¥1500``."""
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code, DEFAULT_SYMBOL)
    exponent = Decimal("1") if code in ZERO_DECIMAL_CURRENCIES else Decimal("0.01")
    quantized = Decimal(str(amount)).quantize(exponent, rounding=ROUND_HALF_UP)
    return f"{symbol}{quantized}"


def format_category(category: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in category.split("-"))
