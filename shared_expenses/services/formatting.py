"""Display helpers used as Jinja filters."""

from __future__ import annotations

from shared_expenses.models.constants import CURRENCY_SYMBOLS, REPORTING_CURRENCY
from shared_expenses.services.money import round2


def format_amount(amount: float, currency: str) -> str:
    """'€10.00 EUR' style: symbol, two decimals, code."""
    symbol = CURRENCY_SYMBOLS.get(currency, "")
    return f"{symbol}{round2(amount):.2f} {currency}"


def format_reporting(amount: int) -> str:
    """'₫250,000 VND' style: whole units with thousands separators."""
    symbol = CURRENCY_SYMBOLS[REPORTING_CURRENCY]
    return f"{symbol}{amount:,} {REPORTING_CURRENCY}"
