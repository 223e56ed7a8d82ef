"""Pydantic domain models for the Shared Expense Tracker."""

from .constants import (
    CURRENCIES,
    BASE_CURRENCY,
    REPORTING_CURRENCY,
    CATEGORIES,
)  # re-export
from .expense import ExpenseIn, Expense
from .rates import RateTable
from .summary import CategorySum, Summary

__all__ = [
    "CURRENCIES",
    "BASE_CURRENCY",
    "REPORTING_CURRENCY",
    "CATEGORIES",
    "ExpenseIn",
    "Expense",
    "RateTable",
    "CategorySum",
    "Summary",
]
