from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from budget_tracker.models.entry import EntryRow
from budget_tracker.services.tracker import BudgetTracker, get_tracker

router = APIRouter(prefix="/entries", tags=["entries"])


class FilterIn(BaseModel):
    filter: Literal["all", "income", "expense"]


class FilterOut(BaseModel):
    filter: str


@router.get(
    "", response_model=List[EntryRow], summary="Visible entries, newest first"
)
async def list_entries(
    filter: Optional[Literal["all", "income", "expense"]] = Query(
        None, description="Override the current filter selection for this read"
    ),
    tracker: BudgetTracker = Depends(get_tracker),
):
    return tracker.entries_view(filter)


@router.get("/filter", response_model=FilterOut, summary="Current filter selection")
async def get_filter(tracker: BudgetTracker = Depends(get_tracker)):
    return FilterOut(filter=tracker.current_filter)


@router.put("/filter", response_model=FilterOut, summary="Select the list filter")
async def set_filter(payload: FilterIn, tracker: BudgetTracker = Depends(get_tracker)):
    return FilterOut(filter=tracker.set_filter(payload.filter))


@router.delete(
    "/{entry_id}", status_code=204, summary="Delete an entry (requires confirm=true)"
)
async def delete_entry(
    entry_id: int,
    confirm: bool = Query(False, description="Explicit confirmation of the delete"),
    tracker: BudgetTracker = Depends(get_tracker),
):
    if not confirm:
        raise HTTPException(status_code=428, detail="delete requires confirmation")
    if not tracker.delete_entry(entry_id, confirmed=True):
        raise HTTPException(status_code=404, detail="entry not found")
    return None
