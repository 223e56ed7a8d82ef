from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .constants import BASE_CURRENCY, CURRENCIES


class RateTable(BaseModel):
    """Units of each currency per 1 unit of the base currency.

    Replaced wholesale on every successful fetch; never mutated.
    """

    model_config = ConfigDict(frozen=True)

    rates: Dict[str, float]
    fetched_at: Optional[datetime] = None
    source: str = "default"

    @field_validator("rates")
    @classmethod
    def complete_and_positive(cls, v: Dict[str, float]) -> Dict[str, float]:
        missing = [c for c in CURRENCIES if c not in v]
        if missing:
            raise ValueError(f"missing rate for {', '.join(missing)}")
        for currency in CURRENCIES:
            rate = v[currency]
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"rate for {currency} must be a positive number")
        if v[BASE_CURRENCY] != 1:
            raise ValueError("base currency rate must be 1")
        return {c: float(v[c]) for c in CURRENCIES}

    @classmethod
    def identity(cls) -> "RateTable":
        return cls(rates={c: 1.0 for c in CURRENCIES})

    @property
    def is_default(self) -> bool:
        return self.source == "default"

    def rate(self, currency: str) -> float:
        return self.rates[currency.upper()]
