from __future__ import annotations

"""Rate source abstraction.

A source performs one fetch of a complete rate table. Keeping the current
table, scheduling and failure handling belong to RateProvider.
"""
from abc import ABC, abstractmethod

from shared_expenses.models.constants import BASE_CURRENCY
from shared_expenses.models.rates import RateTable


class RateSource(ABC):
    name: str = "source"
    base_currency: str = BASE_CURRENCY

    @abstractmethod
    def fetch(self) -> RateTable:
        """Return a fresh table or raise RateFetchError."""
        raise NotImplementedError
