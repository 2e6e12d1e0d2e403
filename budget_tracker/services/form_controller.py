"""Form controller: stages, validates and applies a pending entry.

Mode is "create" unless an edit target is set. A submit that fails
validation changes nothing and reports False; no error reaches the caller.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from budget_tracker.models.constants import ENTRY_TYPES
from budget_tracker.models.entry import Entry, EntryFormValues
from .entry_store import EntryStore

logger = logging.getLogger("budget_tracker.form")


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_amount(raw: str) -> Optional[float]:
    try:
        value = float(raw.strip())
    except (AttributeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def _amount_text(amount: float) -> str:
    return str(int(amount)) if amount.is_integer() else repr(amount)


class FormController:
    def __init__(self) -> None:
        self._values = EntryFormValues()
        self._editing_id: Optional[int] = None

    @property
    def values(self) -> EntryFormValues:
        return self._values

    @property
    def editing_id(self) -> Optional[int]:
        return self._editing_id

    @property
    def mode(self) -> str:
        return "create" if self._editing_id is None else "edit"

    def update(self, **fields: object) -> EntryFormValues:
        changes = {k: v for k, v in fields.items() if v is not None}
        unknown = set(changes) - set(EntryFormValues.model_fields)
        if unknown:
            raise ValueError(f"unknown form fields: {sorted(unknown)}")
        self._values = EntryFormValues.model_validate(
            {**self._values.model_dump(), **changes}
        )
        return self._values

    def reset(self) -> None:
        self._values = EntryFormValues()

    def begin_edit(self, entry: Entry) -> None:
        self._values = EntryFormValues(
            type=entry.type,
            label=entry.label,
            amount=_amount_text(entry.amount),
            category=entry.category,
            currency=entry.currency or "",
        )
        self._editing_id = entry.id

    def cancel_edit(self) -> None:
        self._editing_id = None
        self.reset()

    def _build_entry(self, entry_id: int, date: str) -> Optional[Entry]:
        values = self._values
        amount = parse_amount(values.amount)
        if amount is None or values.type not in ENTRY_TYPES:
            return None
        if not values.label.strip() or not values.category:
            return None
        try:
            return Entry(
                id=entry_id,
                type=values.type,  # type: ignore[arg-type]
                label=values.label,
                amount=amount,
                category=values.category,
                currency=values.currency or None,
                date=date,
            )
        except ValidationError:
            return None

    def submit(self, store: EntryStore, now: Optional[datetime] = None) -> Optional[Entry]:
        """Apply the staged values; return the stored entry or None if rejected."""
        now = now or datetime.now(timezone.utc)
        if self._editing_id is not None:
            target = store.get(self._editing_id)
            entry_id = self._editing_id
            date = target.date if target is not None else iso_timestamp(now)
            entry = self._build_entry(entry_id, date)
            if entry is None:
                logger.debug("edit submit rejected by validation")
                return None
            self._editing_id = None
            if not store.replace(entry):
                logger.info("edit target %s no longer exists", entry_id)
                self.reset()
                return None
        else:
            entry = self._build_entry(store.next_id(now), iso_timestamp(now))
            if entry is None:
                logger.debug("create submit rejected by validation")
                return None
            store.add(entry)
        self.reset()
        return entry
