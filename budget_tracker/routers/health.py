from fastapi import APIRouter, Depends

from budget_tracker.services.tracker import BudgetTracker, get_tracker

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness probe")
async def health(tracker: BudgetTracker = Depends(get_tracker)):
    return {
        "status": "ok",
        "entries": len(tracker.store),
        "rates_source": tracker.rate_cache.table.source,
    }
