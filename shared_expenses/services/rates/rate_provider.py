from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from shared_expenses.core.errors import RateFetchError
from shared_expenses.core.logging import get_logger
from shared_expenses.models.rates import RateTable
from shared_expenses.services.notifications import Notifier
from .base import RateSource

"""Holder of the current rate table.

Purpose:
    Keep the last successfully fetched RateTable and refresh it on demand
    (startup and the periodic scheduler call refresh()).

Design:
    - Starts from the identity table (every currency = 1). If the very first
      fetch fails the identity table stays in place and conversions are
      wrong until a fetch succeeds; this is surfaced only via the failure
      notification.
    - refresh() performs exactly one fetch. Success replaces the table
      wholesale; failure leaves it untouched and pushes an error notice.
    - No retries, no backoff. The next scheduled refresh is the retry.
"""

FETCH_FAILED_MESSAGE = "Failed to fetch exchange rates. Using default values."

logger = get_logger("rates")


class RateProvider:
    def __init__(self, source: RateSource, notifier: Notifier):
        self._source = source
        self._notifier = notifier
        self._table = RateTable.identity()
        self._last_error: Optional[str] = None
        self._last_attempt_at: Optional[datetime] = None
        self._loading = False

    @property
    def table(self) -> RateTable:
        return self._table

    @property
    def source_name(self) -> str:
        return self._source.name

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def has_live_rates(self) -> bool:
        return not self._table.is_default

    def refresh(self) -> bool:
        """Fetch once; return True when the table was replaced."""
        self._loading = True
        self._last_attempt_at = datetime.now(timezone.utc)
        try:
            table = self._source.fetch()
        except RateFetchError as e:
            self._last_error = str(e)
            logger.warning(
                "rate fetch failed (source=%s, keeping %s table): %s",
                self._source.name,
                self._table.source,
                e,
            )
            self._notifier.error(FETCH_FAILED_MESSAGE)
            return False
        finally:
            self._loading = False
        self._table = table
        self._last_error = None
        logger.info("rates refreshed from %s: %s", self._source.name, table.rates)
        return True

    def status(self) -> dict:
        return {
            "rates": dict(self._table.rates),
            "source": self._table.source,
            "fetched_at": self._table.fetched_at.isoformat()
            if self._table.fetched_at
            else None,
            "is_default": self._table.is_default,
            "last_error": self._last_error,
            "last_attempt_at": self._last_attempt_at.isoformat()
            if self._last_attempt_at
            else None,
        }
