from __future__ import annotations

from fastapi import APIRouter, Depends

from budget_tracker.models.rates import RateTable
from budget_tracker.services.tracker import BudgetTracker, get_tracker

"""Rates router.

Endpoints:
    - GET /rates          -> current table (base, rates, fetched_at, source)
    - POST /rates/refresh -> fetch now instead of waiting for the hourly tick

A failed fetch still answers 200: the response carries the fallback table
with source="fallback".
"""

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("", response_model=RateTable, summary="Current exchange rate table")
async def get_rates(tracker: BudgetTracker = Depends(get_tracker)):
    return tracker.rate_cache.table


@router.post("/refresh", response_model=RateTable, summary="Refresh rates now")
async def refresh_rates(tracker: BudgetTracker = Depends(get_tracker)):
    return await tracker.rate_cache.refresh_async()
