"""Entry store: the persisted list of budget entries.

The whole list is written back after every mutation (last write wins). The
store never raises on storage trouble; LocalStorage logs and swallows it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from budget_tracker.db.storage import LocalStorage
from budget_tracker.models.constants import ENTRIES_KEY
from budget_tracker.models.entry import Entry

logger = logging.getLogger("budget_tracker.entries")


def _load_entries(storage: LocalStorage) -> List[Entry]:
    raw = storage.load_json(ENTRIES_KEY, [])
    if not isinstance(raw, list):
        logger.warning("stored entries are not a list; starting empty")
        return []
    entries: List[Entry] = []
    seen = set()
    for item in raw:
        try:
            entry = Entry.model_validate(item)
        except ValidationError:
            logger.warning("skipping malformed stored entry: %r", item)
            continue
        if entry.id in seen:
            logger.warning("skipping duplicate stored entry id %s", entry.id)
            continue
        seen.add(entry.id)
        entries.append(entry)
    return entries


class EntryStore:
    def __init__(self, storage: LocalStorage):
        self._storage = storage
        self._entries: List[Entry] = _load_entries(storage)

    def _persist(self) -> None:
        self._storage.save_json(
            ENTRIES_KEY, [e.model_dump(mode="json") for e in self._entries]
        )

    def list(self) -> List[Entry]:
        return list(self._entries)

    def get(self, entry_id: int) -> Optional[Entry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def next_id(self, now: datetime) -> int:
        """Epoch-millisecond id, bumped past existing ids on clock collisions."""
        candidate = int(now.timestamp() * 1000)
        if self._entries:
            candidate = max(candidate, max(e.id for e in self._entries) + 1)
        return candidate

    def add(self, entry: Entry) -> Entry:
        if self.get(entry.id) is not None:
            raise ValueError(f"entry id {entry.id} already exists")
        self._entries = [*self._entries, entry]
        self._persist()
        return entry

    def replace(self, entry: Entry) -> bool:
        if self.get(entry.id) is None:
            return False
        self._entries = [entry if e.id == entry.id else e for e in self._entries]
        self._persist()
        return True

    def delete(self, entry_id: int) -> bool:
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self._persist()
        return True

    def __len__(self) -> int:
        return len(self._entries)
