from fastapi import APIRouter, Depends
from pydantic import BaseModel

from budget_tracker.services.money import format_currency, round2
from budget_tracker.services.summary import balance_tone
from budget_tracker.services.tracker import BudgetTracker, get_tracker

router = APIRouter(prefix="/summary", tags=["summary"])


class SummaryOut(BaseModel):
    currency: str
    total_income: float
    total_expenses: float
    balance: float
    total_income_text: str
    total_expenses_text: str
    balance_text: str
    balance_tone: str


@router.get("", response_model=SummaryOut, summary="Totals in the display currency")
async def get_summary(tracker: BudgetTracker = Depends(get_tracker)):
    s = tracker.summary()
    return SummaryOut(
        currency=s.currency,
        total_income=round2(s.total_income),
        total_expenses=round2(s.total_expenses),
        balance=round2(s.balance),
        total_income_text=format_currency(s.total_income, s.currency),
        total_expenses_text=format_currency(s.total_expenses, s.currency),
        balance_text=format_currency(s.balance, s.currency),
        balance_tone=balance_tone(s.balance),
    )
