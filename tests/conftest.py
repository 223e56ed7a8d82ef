from typing import List

import pytest
from fastapi.testclient import TestClient

from shared_expenses.core.config import Settings
from shared_expenses.core.errors import RateFetchError
from shared_expenses.main import create_app
from shared_expenses.models.rates import RateTable
from shared_expenses.services.rates.base import RateSource


class FakeRateSource(RateSource):
    """Returns queued tables; a queued exception is raised instead."""

    name = "fake"

    def __init__(self, *results):
        self.results: List[object] = list(results)
        self.calls = 0

    def fetch(self) -> RateTable:
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


def table(usd: float = 2.0, vnd: float = 25000.0, source: str = "fake") -> RateTable:
    return RateTable(rates={"EUR": 1.0, "USD": usd, "VND": vnd}, source=source)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        exchange_rate_provider="static",
        rates_refresh_enabled=False,
        debug=False,
    )


@pytest.fixture
def fake_source() -> FakeRateSource:
    return FakeRateSource(table())


@pytest.fixture
def failing_source() -> FakeRateSource:
    return FakeRateSource(RateFetchError("boom"))


@pytest.fixture
def client(settings, fake_source):
    app = create_app(settings_override=settings, rate_source=fake_source)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def failing_client(settings, failing_source):
    app = create_app(settings_override=settings, rate_source=failing_source)
    with TestClient(app) as c:
        yield c

