from __future__ import annotations
from datetime import datetime
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict


class RateTable(BaseModel):
    """Currency -> multiplier relative to ``base_currency``.

    Replaced wholesale on each refresh, never patched.
    """

    model_config = ConfigDict(frozen=True)

    base_currency: str
    rates: Dict[str, float] = {}
    fetched_at: Optional[datetime] = None
    source: Literal["empty", "remote", "static", "fallback"] = "empty"
