from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends

from shared_expenses.services.controller import ExpenseTrackerController
from .deps import get_controller

"""Rates router.

Endpoints:
    - GET /api/rates          -> current table and fetch status
    - POST /api/rates/refresh -> run one fetch now (same semantics as the
                                 hourly job: failure keeps the last table)
"""

router = APIRouter(prefix="/api/rates", tags=["rates"])


@router.get("", summary="Current exchange-rate table")
async def get_rates(
    controller: ExpenseTrackerController = Depends(get_controller),
):
    return controller.rate_provider.status()


@router.post("/refresh", summary="Fetch exchange rates now")
async def refresh_rates(
    controller: ExpenseTrackerController = Depends(get_controller),
):
    ok = await asyncio.to_thread(controller.refresh_rates)
    return {"ok": ok, "rates": controller.rate_provider.status()}
