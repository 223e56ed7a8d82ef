import pytest

from conftest import FakeRateSource, table

from shared_expenses.core.config import Settings
from shared_expenses.core.errors import RateFetchError
from shared_expenses.models.rates import RateTable
from shared_expenses.services.http_client import HttpError
from shared_expenses.services.notifications import Notifier
from shared_expenses.services.rates.providers import (
    ExchangeRateApiSource,
    StaticRateSource,
    make_rate_source,
)
from shared_expenses.services.rates.rate_provider import (
    FETCH_FAILED_MESSAGE,
    RateProvider,
)


def test_provider_starts_with_identity_table():
    provider = RateProvider(FakeRateSource(table()), Notifier())
    assert provider.table.rates == {"EUR": 1.0, "USD": 1.0, "VND": 1.0}
    assert provider.table.is_default
    assert not provider.has_live_rates


def test_successful_refresh_replaces_table():
    notifier = Notifier()
    provider = RateProvider(FakeRateSource(table(usd=1.1, vnd=26000.0)), notifier)
    assert provider.refresh() is True
    assert provider.table.rates == {"EUR": 1.0, "USD": 1.1, "VND": 26000.0}
    assert provider.has_live_rates
    assert notifier.pending() == []


def test_failure_after_success_keeps_last_table():
    notifier = Notifier()
    good = table(usd=1.2, vnd=25500.0)
    source = FakeRateSource(good, RateFetchError("down"))
    provider = RateProvider(source, notifier)
    assert provider.refresh() is True
    assert provider.refresh() is False
    assert provider.table == good
    assert provider.last_error == "down"
    notices = notifier.drain()
    assert [n.message for n in notices] == [FETCH_FAILED_MESSAGE]
    assert notices[0].level == "error"


def test_first_failure_leaves_identity_table():
    notifier = Notifier()
    provider = RateProvider(FakeRateSource(RateFetchError("offline")), notifier)
    assert provider.refresh() is False
    assert provider.table.is_default
    assert provider.table.rate("VND") == 1.0
    assert len(notifier.pending()) == 1


def test_refresh_performs_exactly_one_fetch():
    source = FakeRateSource(RateFetchError("offline"))
    provider = RateProvider(source, Notifier())
    provider.refresh()
    assert source.calls == 1
    assert not provider.is_loading


def test_external_source_parses_payload():
    seen = []

    def fetcher(url):
        seen.append(url)
        return {"base": "EUR", "rates": {"EUR": 1, "USD": 1.09, "VND": 27123.5, "GBP": 0.85}}

    source = ExchangeRateApiSource("https://example.test/v4/latest/", fetcher=fetcher)
    result = source.fetch()
    assert seen == ["https://example.test/v4/latest/EUR"]
    assert result.rates == {"EUR": 1.0, "USD": 1.09, "VND": 27123.5}
    assert result.source == "exchangerate-api"
    assert result.fetched_at is not None


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"rates": []},
        {"rates": {"USD": 1.1}},
        {"rates": {"USD": "1.1", "VND": 25000}},
        {"rates": {"USD": 0, "VND": 25000}},
        {"rates": {"USD": -1, "VND": 25000}},
        {"rates": {"USD": True, "VND": 25000}},
        {"rates": {"USD": float("inf"), "VND": 25000}},
        {"rates": {"USD": 10**400, "VND": 25000}},
    ],
)
def test_external_source_rejects_malformed(payload):
    source = ExchangeRateApiSource("https://example.test", fetcher=lambda url: payload)
    with pytest.raises(RateFetchError):
        source.fetch()


def test_oversized_rate_is_a_failed_refresh():
    notifier = Notifier()
    payload = {"rates": {"USD": 10**400, "VND": 25000}}
    source = ExchangeRateApiSource("https://example.test", fetcher=lambda url: payload)
    provider = RateProvider(source, notifier)
    assert provider.refresh() is False
    assert provider.table.is_default
    assert "out of range" in provider.last_error
    assert [n.message for n in notifier.drain()] == [FETCH_FAILED_MESSAGE]


def test_external_source_wraps_transport_errors():
    def fetcher(url):
        raise HttpError("connection refused")

    source = ExchangeRateApiSource("https://example.test", fetcher=fetcher)
    with pytest.raises(RateFetchError, match="connection refused"):
        source.fetch()


def test_static_source_and_factory():
    settings = Settings(exchange_rate_provider="static")
    source = make_rate_source("static", settings)
    assert isinstance(source, StaticRateSource)
    assert source.fetch().source == "static"

    http = make_rate_source("external-http", settings)
    assert isinstance(http, ExchangeRateApiSource)
    assert http.url == "https://api.exchangerate-api.com/v4/latest/EUR"

    with pytest.raises(ValueError):
        make_rate_source("carrier-pigeon", settings)


@pytest.mark.parametrize(
    "rates",
    [
        {"EUR": 1.0, "USD": 1.0},
        {"EUR": 2.0, "USD": 1.0, "VND": 1.0},
        {"EUR": 1.0, "USD": -1.0, "VND": 1.0},
    ],
)
def test_rate_table_validation(rates):
    with pytest.raises(ValueError):
        RateTable(rates=rates)
