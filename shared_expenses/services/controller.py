from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional

from shared_expenses.core.errors import InvalidExpenseError
from shared_expenses.core.logging import get_logger
from shared_expenses.models.expense import Expense
from shared_expenses.models.summary import CategorySum, Summary
from shared_expenses.services.aggregator import aggregate
from shared_expenses.services.expense_store import ExpenseStore, group_by_category
from shared_expenses.services.expense_validation import validate_expense
from shared_expenses.services.notifications import Notifier
from shared_expenses.services.rates.conversion import convert_to_reporting
from shared_expenses.services.rates.rate_provider import RateProvider

SUBMIT_OK_MESSAGE = "Expense added successfully!"

logger = get_logger("controller")


@dataclass(frozen=True)
class ExpenseView:
    expense: Expense
    reporting_amount: int


@dataclass(frozen=True)
class CategoryView:
    category: str
    expenses: List[ExpenseView]
    sums: CategorySum


@dataclass(frozen=True)
class Report:
    groups: List[CategoryView]
    summary: Summary


class ExpenseTrackerController:
    """Single owner of application state.

    Holds the expense store, the rate provider and the notifier; routers and
    the refresh scheduler go through this object instead of sharing globals.
    """

    def __init__(self, store: ExpenseStore, rate_provider: RateProvider, notifier: Notifier):
        self.store = store
        self.rate_provider = rate_provider
        self.notifier = notifier

    @property
    def is_loading(self) -> bool:
        return self.rate_provider.is_loading

    def submit_expense(
        self,
        amount: Any,
        currency: str,
        category: str,
        description: Optional[str] = None,
    ) -> Expense:
        try:
            expense_in = validate_expense(amount, currency, category, description)
        except InvalidExpenseError as e:
            logger.info("expense rejected: %s", e.message)
            self.notifier.error(e.message)
            raise
        expense = Expense(
            id=self.store.next_id(),
            created_at=datetime.now(timezone.utc),
            **expense_in.model_dump(),
        )
        self.store.append(expense)
        logger.info(
            "expense added id=%s category=%s currency=%s",
            expense.id,
            expense.category,
            expense.currency,
        )
        self.notifier.success(SUBMIT_OK_MESSAGE)
        return expense

    def refresh_rates(self) -> bool:
        return self.rate_provider.refresh()

    def summary(self) -> Summary:
        return aggregate(self.store.all(), self.rate_provider.table)

    def report(self) -> Report:
        """Expenses grouped for display plus the totals, from one aggregation."""
        rates = self.rate_provider.table
        expenses_all = self.store.all()
        summary = aggregate(expenses_all, rates)
        views: List[CategoryView] = []
        for category, expenses in group_by_category(expenses_all).items():
            views.append(
                CategoryView(
                    category=category,
                    expenses=[
                        ExpenseView(
                            expense=e,
                            reporting_amount=convert_to_reporting(e.amount, e.currency, rates),
                        )
                        for e in expenses
                    ],
                    sums=summary.per_category[category],
                )
            )
        return Report(groups=views, summary=summary)
