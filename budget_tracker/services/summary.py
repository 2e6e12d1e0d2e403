"""Summary aggregation in the display currency.

Recomputed in full on every call; entry lists are small and local.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from budget_tracker.models.constants import EXPENSE, INCOME
from budget_tracker.models.entry import Entry
from budget_tracker.models.summary import Summary
from budget_tracker.services.rates.conversion import convert_amount


def summarize(
    entries: Iterable[Entry],
    display_currency: str,
    rates: Mapping[str, float],
    base_currency: str,
) -> Summary:
    total_income = 0.0
    total_expenses = 0.0
    for entry in entries:
        converted = convert_amount(
            entry.amount,
            entry.currency or display_currency,
            display_currency,
            rates,
            base_currency,
        )
        if entry.type == INCOME:
            total_income += converted
        elif entry.type == EXPENSE:
            total_expenses += converted
    return Summary(
        currency=display_currency,
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
    )


def balance_tone(balance: float) -> str:
    if balance < 0:
        return "negative"
    if balance > 0:
        return "positive"
    return "neutral"
