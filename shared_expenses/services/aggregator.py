from __future__ import annotations

from typing import Dict, Iterable

from shared_expenses.models.constants import CATEGORIES
from shared_expenses.models.expense import Expense
from shared_expenses.models.rates import RateTable
from shared_expenses.models.summary import CategorySum, Summary
from shared_expenses.services.rates.conversion import convert_to_reporting

"""Per-category and grand-total aggregation.

Pure: the same (expenses, rates) pair always yields the same Summary. There
is no incremental state; callers re-run aggregate() whenever the expense
list or the rate table changes, so reporting totals always reflect the
current table.

Each expense's reporting contribution is rounded before it is summed, so the
reporting total may differ from rounding the unrounded sum once by up to
half a unit per expense. Kept as is.
"""


def aggregate(expenses: Iterable[Expense], rates: RateTable) -> Summary:
    sums: Dict[str, CategorySum] = {}
    for expense in expenses:
        acc = sums.get(expense.category)
        if acc is None:
            acc = sums[expense.category] = CategorySum()
        # Native subtotals are never cross-converted
        acc.native[expense.currency] += expense.amount
        acc.reporting += convert_to_reporting(expense.amount, expense.currency, rates)
        acc.count += 1

    per_category = {c: sums[c] for c in CATEGORIES if c in sums}
    # Categories outside the enumeration (not produced by validated input) go last
    for c, acc in sums.items():
        per_category.setdefault(c, acc)

    total = CategorySum()
    for acc in per_category.values():
        total.add(acc)
    return Summary(per_category=per_category, total=total)
