"""Submission validation.

Runs in the controller before anything reaches the store. The amount arrives
as free text from the form, so it is parsed here rather than by pydantic; a
failure maps to the single "Please enter a valid amount" message the form
shows. Currency and category are checked by ExpenseIn.
"""

from __future__ import annotations

import math
from typing import Any, List

from pydantic import ValidationError

from shared_expenses.core.errors import InvalidAmountError, InvalidExpenseError
from shared_expenses.models.expense import ExpenseIn

# Manual entry; larger values are typos and would overflow float subtotals
MAX_AMOUNT = 1e15


def parse_amount(raw: Any) -> float:
    if raw is None or isinstance(raw, bool):
        raise InvalidAmountError()
    text = raw if isinstance(raw, (int, float)) else str(raw).strip()
    if text == "":
        raise InvalidAmountError()
    try:
        value = float(text)
    except (OverflowError, ValueError):
        raise InvalidAmountError() from None
    if not math.isfinite(value) or value <= 0 or value > MAX_AMOUNT:
        raise InvalidAmountError()
    return value


def validate_expense(
    amount: Any, currency: str, category: str, description: str | None = None
) -> ExpenseIn:
    value = parse_amount(amount)
    try:
        return ExpenseIn(
            amount=value,
            currency=currency,
            category=category,
            description=description or "",
        )
    except ValidationError as ve:
        errors: List[str] = []
        for err in ve.errors():
            loc = ".".join([str(p) for p in err.get("loc", [])])
            msg = err.get("msg", "invalid")
            errors.append(f"{loc}: {msg}")
        raise InvalidExpenseError(errors[0], errors) from ve
