from fastapi import APIRouter, Depends

from shared_expenses.core.config import Settings
from shared_expenses.services.controller import ExpenseTrackerController
from .deps import get_app_settings, get_controller

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    settings: Settings = Depends(get_app_settings),
    controller: ExpenseTrackerController = Depends(get_controller),
):
    return {
        "status": "ok",
        "version": settings.version,
        "expenses": len(controller.store),
        "live_rates": controller.rate_provider.has_live_rates,
    }
