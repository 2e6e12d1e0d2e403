from __future__ import annotations
from pydantic import BaseModel


class Summary(BaseModel):
    currency: str
    total_income: float
    total_expenses: float
    balance: float
