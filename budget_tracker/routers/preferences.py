from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from budget_tracker.services.tracker import BudgetTracker, get_tracker

router = APIRouter(prefix="/preferences", tags=["preferences"])


class PreferencesOut(BaseModel):
    display_currency: str
    dark_mode: bool
    mode: str


class CurrencyIn(BaseModel):
    currency: str = Field(..., description="Display currency code (e.g. USD, EUR)")


class ModeIn(BaseModel):
    mode: Literal["light", "dark"]


def _out(tracker: BudgetTracker) -> PreferencesOut:
    prefs = tracker.preferences
    return PreferencesOut(
        display_currency=prefs.display_currency,
        dark_mode=prefs.dark_mode,
        mode=prefs.mode,
    )


@router.get("", response_model=PreferencesOut, summary="Display preferences")
async def get_preferences(tracker: BudgetTracker = Depends(get_tracker)):
    return _out(tracker)


@router.put(
    "/currency", response_model=PreferencesOut, summary="Change the display currency"
)
async def set_currency(payload: CurrencyIn, tracker: BudgetTracker = Depends(get_tracker)):
    try:
        tracker.preferences.set_display_currency(payload.currency)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _out(tracker)


@router.post(
    "/dark-mode/toggle", response_model=PreferencesOut, summary="Flip dark mode"
)
async def toggle_dark_mode(tracker: BudgetTracker = Depends(get_tracker)):
    tracker.preferences.toggle_dark_mode()
    return _out(tracker)


@router.put("/mode", response_model=PreferencesOut, summary="Choose light or dark mode")
async def set_mode(payload: ModeIn, tracker: BudgetTracker = Depends(get_tracker)):
    tracker.preferences.set_mode(payload.mode)
    return _out(tracker)
