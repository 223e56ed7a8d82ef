from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import List, Optional, Union

from shared_expenses.models.constants import DEFAULT_CATEGORY, DEFAULT_CURRENCY
from shared_expenses.models.expense import Expense
from shared_expenses.services.controller import ExpenseTrackerController
from .deps import get_controller

router = APIRouter(prefix="/api", tags=["expenses"])


# Request / Response Models ----------------------------------------
class ExpenseSubmission(BaseModel):
    # Raw text accepted; parsed by the controller so the API and the form
    # reject the same inputs with the same message.
    amount: Union[float, str, None] = None
    currency: str = DEFAULT_CURRENCY
    category: str = DEFAULT_CATEGORY
    description: Optional[str] = Field(None, max_length=500)


# Routes -----------------------------------------------------------
@router.post(
    "/expenses", response_model=Expense, status_code=201, summary="Add an expense"
)
async def create_expense(
    payload: ExpenseSubmission,
    controller: ExpenseTrackerController = Depends(get_controller),
):
    # InvalidExpenseError is turned into a 422 by the app-level handler
    return controller.submit_expense(
        payload.amount, payload.currency, payload.category, payload.description
    )


@router.get(
    "/expenses", response_model=List[Expense], summary="List expenses in insertion order"
)
async def list_expenses(
    controller: ExpenseTrackerController = Depends(get_controller),
):
    return controller.store.all()


@router.get("/summary", summary="Per-category and grand totals")
async def get_summary(
    controller: ExpenseTrackerController = Depends(get_controller),
):
    return controller.summary().to_dict()


@router.get("/notifications", summary="Drain pending notifications")
async def drain_notifications(
    controller: ExpenseTrackerController = Depends(get_controller),
):
    return [n.to_dict() for n in controller.notifier.drain()]
