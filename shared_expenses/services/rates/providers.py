from __future__ import annotations

"""Concrete rate sources and factory.

'static' returns a fixed table so the app runs offline (dev, demos, tests);
'external-http' asks exchangerate-api.com for rates relative to the base
currency on every fetch.
"""
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import ValidationError

from shared_expenses.core.config import Settings
from shared_expenses.core.errors import RateFetchError
from shared_expenses.models.constants import BASE_CURRENCY, CURRENCIES
from shared_expenses.models.rates import RateTable
from shared_expenses.services.http_client import HttpError, get_json
from .base import RateSource

# Placeholder values, roughly market rates per 1 EUR
_STATIC_RATES: Dict[str, float] = {
    "EUR": 1.0,
    "USD": 1.08,
    "VND": 27000.0,
}

JsonFetcher = Callable[[str], Dict[str, Any]]


class StaticRateSource(RateSource):
    name = "static"

    def __init__(self, rates: Optional[Mapping[str, float]] = None):
        self._rates = dict(rates or _STATIC_RATES)

    def fetch(self) -> RateTable:
        return RateTable(
            rates=self._rates,
            fetched_at=datetime.now(timezone.utc),
            source=self.name,
        )


def parse_rates_payload(payload: Mapping[str, Any], fetched_at: datetime, source: str) -> RateTable:
    """Build a RateTable from an exchangerate-api style body.

    Expected shape: {"base": "EUR", "rates": {"USD": 1.08, "VND": 27000, ...}}.
    The base entry is always forced to 1 regardless of what the body says.
    """
    raw = payload.get("rates")
    if not isinstance(raw, Mapping):
        raise RateFetchError("response has no 'rates' object")
    new_rates: Dict[str, float] = {BASE_CURRENCY: 1.0}
    for qc in CURRENCIES:
        if qc == BASE_CURRENCY:
            continue
        v = raw.get(qc)
        # bool is an int subclass; reject it explicitly
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise RateFetchError(f"missing or non-numeric rate for {qc}")
        try:
            rate = float(v)
        except (OverflowError, TypeError, ValueError):
            raise RateFetchError(f"rate for {qc} is out of range") from None
        if not math.isfinite(rate) or rate <= 0:
            raise RateFetchError(f"invalid rate for {qc}: {rate}")
        new_rates[qc] = rate
    try:
        return RateTable(rates=new_rates, fetched_at=fetched_at, source=source)
    except ValidationError as e:
        raise RateFetchError(str(e)) from e


class ExchangeRateApiSource(RateSource):
    name = "exchangerate-api"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        fetcher: Optional[JsonFetcher] = None,
    ):
        self._url = f"{base_url.rstrip('/')}/{self.base_currency}"
        self._timeout = timeout
        self._fetcher = fetcher

    @property
    def url(self) -> str:
        return self._url

    def _get(self) -> Dict[str, Any]:
        if self._fetcher is not None:
            return self._fetcher(self._url)
        # Single attempt; the hourly schedule is the only retry
        return get_json(self._url, timeout=self._timeout)

    def fetch(self) -> RateTable:
        try:
            payload = self._get()
        except HttpError as e:
            raise RateFetchError(str(e)) from e
        return parse_rates_payload(
            payload, fetched_at=datetime.now(timezone.utc), source=self.name
        )


_SOURCE_REGISTRY = {
    "static": lambda settings: StaticRateSource(),
    "external-http": lambda settings: ExchangeRateApiSource(
        settings.exchange_api_url, timeout=settings.http_timeout_seconds
    ),
}


def make_rate_source(kind: str, settings: Settings) -> RateSource:
    factory = _SOURCE_REGISTRY.get(kind)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    return factory(settings)
