from __future__ import annotations

import time
from typing import Dict, Iterable, Iterator, List

from shared_expenses.models.constants import CATEGORIES
from shared_expenses.models.expense import Expense


class ExpenseStore:
    """Append-only, in-memory, insertion-ordered expense list.

    Validation is the caller's job; the store accepts whatever it is given.
    There is no update or remove.
    """

    def __init__(self):
        self._expenses: List[Expense] = []
        self._last_id = 0

    def next_id(self) -> int:
        """Creation timestamp in ms, bumped when the clock has not moved."""
        candidate = time.time_ns() // 1_000_000
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def append(self, expense: Expense) -> None:
        self._expenses.append(expense)
        self._last_id = max(self._last_id, expense.id)

    def all(self) -> List[Expense]:
        return list(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(list(self._expenses))

    def grouped_by_category(self) -> Dict[str, List[Expense]]:
        return group_by_category(self._expenses)


def group_by_category(expenses: Iterable[Expense]) -> Dict[str, List[Expense]]:
    """Group in category display order, keeping insertion order inside each."""
    grouped: Dict[str, List[Expense]] = {c: [] for c in CATEGORIES}
    for expense in expenses:
        grouped.setdefault(expense.category, []).append(expense)
    return {c: items for c, items in grouped.items() if items}
