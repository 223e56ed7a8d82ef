from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request, Form, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from shared_expenses.core.config import Settings
from shared_expenses.core.errors import InvalidExpenseError
from shared_expenses.models.constants import (
    BASE_CURRENCY,
    CATEGORIES,
    CURRENCIES,
    CURRENCY_LABELS,
    DEFAULT_CATEGORY,
    DEFAULT_CURRENCY,
    REPORTING_CURRENCY,
)
from shared_expenses.services.controller import ExpenseTrackerController
from shared_expenses.services.formatting import format_amount, format_reporting
from .deps import get_app_settings, get_controller

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.filters["money"] = format_amount
templates.env.filters["reporting"] = format_reporting


def _empty_form(currency: str = DEFAULT_CURRENCY, category: str = DEFAULT_CATEGORY) -> Dict[str, str]:
    return {"amount": "", "currency": currency, "category": category, "description": ""}


def _page_context(
    request: Request,
    controller: ExpenseTrackerController,
    settings: Settings,
    form_state: Dict[str, str],
    errors: Optional[List[str]] = None,
) -> Dict[str, Any]:
    # Notices are transient: shown on this render only
    notices = controller.notifier.drain()
    report = controller.report()
    return {
        "request": request,
        "app_name": settings.app_name,
        "version": settings.version,
        "currencies": [(c, CURRENCY_LABELS[c]) for c in CURRENCIES],
        "categories": list(CATEGORIES),
        "base_currency": BASE_CURRENCY,
        "reporting_currency": REPORTING_CURRENCY,
        "form": form_state,
        "errors": errors or [],
        "notices": notices,
        "is_loading": controller.is_loading,
        "groups": report.groups,
        "total": report.summary.total,
        "rates": controller.rate_provider.table,
    }


@router.get("/", response_class=HTMLResponse)
async def ui_home(
    request: Request,
    controller: ExpenseTrackerController = Depends(get_controller),
    settings: Settings = Depends(get_app_settings),
):
    context = _page_context(request, controller, settings, _empty_form())
    return templates.TemplateResponse(request, "index.html", context)


@router.post("/", response_class=HTMLResponse)
async def ui_add_expense(
    request: Request,
    amount: str = Form(""),
    currency: str = Form(DEFAULT_CURRENCY),
    category: str = Form(DEFAULT_CATEGORY),
    description: str | None = Form(None),
    controller: ExpenseTrackerController = Depends(get_controller),
    settings: Settings = Depends(get_app_settings),
):
    errors: List[str] = []
    try:
        controller.submit_expense(amount, currency, category, description)
    except InvalidExpenseError as e:
        errors = list(e.errors)

    if errors:
        # Keep what the user typed so they can correct it
        form_state = {
            "amount": amount,
            "currency": currency,
            "category": category,
            "description": description or "",
        }
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        # Clear amount and description; keep currency and category for faster entry
        form_state = _empty_form(currency=currency, category=category)
        status_code = status.HTTP_200_OK

    context = _page_context(request, controller, settings, form_state, errors)
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)
