"""Filter / sort derivations over the entry list.

Everything here is pure: inputs are never mutated and the same inputs give
the same output.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Mapping

from budget_tracker.models.constants import FILTER_ALL, FILTERS, INCOME
from budget_tracker.models.entry import Entry, EntryRow
from budget_tracker.services.money import format_category, format_currency, round2
from budget_tracker.services.rates.conversion import convert_amount

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_entries(entries: Iterable[Entry], selection: str) -> List[Entry]:
    if selection not in FILTERS:
        raise ValueError(f"unsupported filter '{selection}'")
    if selection == FILTER_ALL:
        return list(entries)
    return [e for e in entries if e.type == selection]


def sort_entries(entries: Iterable[Entry]) -> List[Entry]:
    """Newest first; ties keep list order and unparsable dates go last."""
    return sorted(
        entries,
        key=lambda e: parse_timestamp(e.date) or _OLDEST,
        reverse=True,
    )


def visible_entries(entries: Iterable[Entry], selection: str) -> List[Entry]:
    return sort_entries(filter_entries(entries, selection))


def format_date(value: str) -> str:
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def present_entry(
    entry: Entry,
    display_currency: str,
    rates: Mapping[str, float],
    base_currency: str,
) -> EntryRow:
    source = entry.currency or display_currency
    display_amount = convert_amount(
        entry.amount, source, display_currency, rates, base_currency
    )
    return EntryRow(
        id=entry.id,
        type=entry.type,
        label=entry.label,
        category=entry.category,
        category_label=format_category(entry.category),
        currency=entry.currency,
        amount=entry.amount,
        display_amount=round2(display_amount),
        display_text=format_currency(display_amount, display_currency),
        sign="+" if entry.type == INCOME else "-",
        date=entry.date,
        date_label=format_date(entry.date),
    )
