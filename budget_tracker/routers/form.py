from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from budget_tracker.models.entry import Entry, EntryFormUpdate, EntryFormValues
from budget_tracker.services.tracker import BudgetTracker, get_tracker

router = APIRouter(prefix="/form", tags=["form"])


class FormState(BaseModel):
    mode: str
    editing_id: Optional[int]
    values: EntryFormValues


class SubmitResult(BaseModel):
    accepted: bool
    entry: Optional[Entry] = None
    form: FormState


def _state(tracker: BudgetTracker) -> FormState:
    form = tracker.form
    return FormState(mode=form.mode, editing_id=form.editing_id, values=form.values)


@router.get("", response_model=FormState, summary="Staged form values and mode")
async def get_form(tracker: BudgetTracker = Depends(get_tracker)):
    return _state(tracker)


@router.patch("", response_model=FormState, summary="Stage form field changes")
async def update_form(
    payload: EntryFormUpdate, tracker: BudgetTracker = Depends(get_tracker)
):
    tracker.update_form(**payload.model_dump(exclude_none=True))
    return _state(tracker)


@router.post(
    "/submit",
    response_model=SubmitResult,
    summary="Create or update an entry from the staged form",
)
async def submit_form(tracker: BudgetTracker = Depends(get_tracker)):
    # Invalid input is reported as accepted=false, never as an error status.
    entry = tracker.submit_form()
    return SubmitResult(accepted=entry is not None, entry=entry, form=_state(tracker))


@router.post(
    "/edit/{entry_id}", response_model=FormState, summary="Load an entry for editing"
)
async def begin_edit(entry_id: int, tracker: BudgetTracker = Depends(get_tracker)):
    if not tracker.begin_edit(entry_id):
        raise HTTPException(status_code=404, detail="entry not found")
    return _state(tracker)


@router.post("/cancel", response_model=FormState, summary="Leave edit mode")
async def cancel_edit(tracker: BudgetTracker = Depends(get_tracker)):
    tracker.cancel_edit()
    return _state(tracker)
