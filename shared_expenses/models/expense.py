from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from .constants import CURRENCIES, CATEGORIES


class ExpenseIn(BaseModel):
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    currency: str
    category: str
    description: str = ""

    @field_validator("currency")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        v = v.upper()
        if v not in CURRENCIES:
            raise ValueError("unsupported currency")
        return v

    @field_validator("category")
    @classmethod
    def valid_category(cls, v: str) -> str:
        if v not in CATEGORIES:
            raise ValueError("unsupported category")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, v):  # type: ignore[override]
        return "" if v is None else v


class Expense(ExpenseIn):
    """A stored expense. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: int
    created_at: datetime
