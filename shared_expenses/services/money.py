"""Money / rounding helpers.

Centralized so the aggregator, conversion and rendering use identical
rounding semantics (half away from zero, like a cashier would).

Arithmetic runs in a wide Decimal context: the default 28 digits cannot
quantize large reporting amounts, and float products can overflow to inf.
"""

from __future__ import annotations
from decimal import Context, Decimal, ROUND_HALF_UP

# Enough digits for any float amount times any float rate ratio
MONEY_CONTEXT = Context(prec=1000, rounding=ROUND_HALF_UP)


def to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def round2(value: float) -> float:
    return float(
        to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP, context=MONEY_CONTEXT)
    )


def round_whole(value: float | Decimal) -> int:
    if not isinstance(value, Decimal):
        value = to_decimal(value)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP, context=MONEY_CONTEXT))
