from __future__ import annotations

from shared_expenses.models.constants import BASE_CURRENCY, REPORTING_CURRENCY
from shared_expenses.models.rates import RateTable
from shared_expenses.services.money import MONEY_CONTEXT, round_whole, to_decimal

"""Currency conversion through the base currency.

Rates are "units of currency per 1 base unit", so native -> base divides by
the currency's rate and base -> reporting multiplies by the reporting rate.
Reporting amounts are rounded to whole units once per conversion.
"""


def convert_to_base(amount: float, currency: str, rates: RateTable) -> float:
    currency = currency.upper()
    if currency == BASE_CURRENCY:
        return amount
    return amount / rates.rate(currency)


def convert_to_reporting(amount: float, currency: str, rates: RateTable) -> int:
    currency = currency.upper()
    reporting_rate = to_decimal(rates.rate(REPORTING_CURRENCY))
    if currency == BASE_CURRENCY:
        reporting = MONEY_CONTEXT.multiply(to_decimal(amount), reporting_rate)
    else:
        base = MONEY_CONTEXT.divide(to_decimal(amount), to_decimal(rates.rate(currency)))
        reporting = MONEY_CONTEXT.multiply(base, reporting_rate)
    return round_whole(reporting)
