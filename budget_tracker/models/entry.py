from __future__ import annotations

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import CATEGORIES, CURRENCIES


class Entry(BaseModel):
    """A single income or expense record.

    Instances are frozen; an edit produces a new Entry carrying the same id
    and date.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    type: Literal["income", "expense"]
    label: str
    amount: float = Field(..., ge=0)
    category: str
    currency: Optional[str] = None  # None -> display currency
    date: str

    @field_validator("label")
    @classmethod
    def _label_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("label cannot be empty")
        return value.strip()

    @field_validator("amount")
    @classmethod
    def _amount_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("amount must be a finite number")
        return value

    @field_validator("category")
    @classmethod
    def _valid_category(cls, value: str) -> str:
        if value not in CATEGORIES:
            raise ValueError("unsupported category")
        return value

    @field_validator("currency", mode="before")
    @classmethod
    def _valid_currency(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        value = str(value).upper()
        if value not in CURRENCIES:
            raise ValueError("unsupported currency")
        return value


class EntryFormValues(BaseModel):
    """Staged form fields, kept as typed by the user until submit."""

    type: str = "income"
    label: str = ""
    amount: str = ""
    category: str = ""
    currency: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, value) -> str:  # type: ignore[no-untyped-def]
        return "" if value is None else str(value)

    @field_validator("currency", mode="before")
    @classmethod
    def _currency_as_text(cls, value) -> str:  # type: ignore[no-untyped-def]
        return "" if value is None else str(value)


class EntryFormUpdate(BaseModel):
    """Partial update of staged form fields; omitted fields keep their value."""

    type: Optional[str] = None
    label: Optional[str] = None
    amount: Optional[str] = None
    category: Optional[str] = None
    currency: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, value):  # type: ignore[no-untyped-def]
        return None if value is None else str(value)


class EntryRow(BaseModel):
    """Display row for the entry list."""

    id: int
    type: str
    label: str
    category: str
    category_label: str
    currency: Optional[str]
    amount: float
    display_amount: float
    display_text: str
    sign: str
    date: str
    date_label: str
