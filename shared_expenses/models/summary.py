from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .constants import CURRENCIES


def _zero_native() -> Dict[str, float]:
    return {c: 0.0 for c in CURRENCIES}


@dataclass
class CategorySum:
    """Category accumulator.

    ``native`` holds one subtotal per currency in that currency; amounts are
    never cross-converted. ``reporting`` is the sum of each expense's rounded
    reporting-currency contribution.
    """

    native: Dict[str, float] = field(default_factory=_zero_native)
    reporting: int = 0
    count: int = 0

    def add(self, other: "CategorySum") -> None:
        for currency in CURRENCIES:
            self.native[currency] += other.native[currency]
        self.reporting += other.reporting
        self.count += other.count

    def to_dict(self) -> dict:
        return {
            "native": dict(self.native),
            "reporting": self.reporting,
            "count": self.count,
        }


@dataclass
class Summary:
    per_category: Dict[str, CategorySum]
    total: CategorySum

    def to_dict(self) -> dict:
        return {
            "per_category": {k: v.to_dict() for k, v in self.per_category.items()},
            "total": self.total.to_dict(),
        }
