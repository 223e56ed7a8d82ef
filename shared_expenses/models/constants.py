"""Domain constants and enumerations for validation.

Order matters: currencies and categories are rendered in the order listed.
"""

from typing import Dict, Tuple

CURRENCIES: Tuple[str, ...] = ("EUR", "USD", "VND")
BASE_CURRENCY = "EUR"
# Common unit for category and grand totals; has no fractional subunit.
REPORTING_CURRENCY = "VND"

CURRENCY_SYMBOLS: Dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "VND": "₫",
}

CURRENCY_LABELS: Dict[str, str] = {
    "EUR": "Euro (€)",
    "USD": "US Dollar ($)",
    "VND": "Vietnamese Dong (₫)",
}

CATEGORIES: Tuple[str, ...] = (
    "Eating in the restaurant",
    "Supermarket for food",
    "Groceries",
    "Furniture",
    "Other",
)

DEFAULT_CURRENCY = BASE_CURRENCY
DEFAULT_CATEGORY = CATEGORIES[0]
