import io
import urllib.error
import urllib.request

import pytest

from shared_expenses.services.http_client import HttpError, get_json
from shared_expenses.services.notifications import Notifier
from shared_expenses.services.rates.providers import ExchangeRateApiSource
from shared_expenses.services.rates.rate_provider import (
    FETCH_FAILED_MESSAGE,
    RateProvider,
)

URL = "https://example.test/EUR"


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200):
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def serve(monkeypatch, body: bytes = b"", status: int = 200, error: Exception = None):
    seen = []

    def fake_urlopen(req, timeout=None):
        seen.append((req.full_url, req.get_header("Accept"), timeout))
        if error is not None:
            raise error
        return FakeResponse(body, status)

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    return seen


def test_returns_json_object(monkeypatch):
    seen = serve(monkeypatch, b'{"base": "EUR", "rates": {"USD": 1.08}}')
    assert get_json(URL, timeout=2.0) == {"base": "EUR", "rates": {"USD": 1.08}}
    assert seen == [(URL, "application/json", 2.0)]


def test_single_attempt_on_failure(monkeypatch):
    seen = serve(monkeypatch, error=urllib.error.URLError("connection refused"))
    with pytest.raises(HttpError, match="connection refused"):
        get_json(URL)
    assert len(seen) == 1


@pytest.mark.parametrize(
    "body,status",
    [
        (b"[1, 2, 3]", 200),
        (b'"EUR"', 200),
        (b"\xff\xfe", 200),
        (b"<html>not json</html>", 200),
        (b'{"rates": {}}', 500),
    ],
)
def test_bad_responses_raise_http_error(monkeypatch, body, status):
    serve(monkeypatch, body, status)
    with pytest.raises(HttpError):
        get_json(URL)


@pytest.mark.parametrize(
    "error",
    [
        urllib.error.HTTPError(URL, 503, "Service Unavailable", None, io.BytesIO(b"")),
        urllib.error.URLError("name resolution failed"),
        TimeoutError("timed out"),
    ],
)
def test_transport_errors_raise_http_error(monkeypatch, error):
    serve(monkeypatch, error=error)
    with pytest.raises(HttpError) as exc:
        get_json(URL)
    assert exc.value.__cause__ is error


def test_non_object_body_is_a_failed_refresh(monkeypatch):
    serve(monkeypatch, b"[]")
    notifier = Notifier()
    provider = RateProvider(ExchangeRateApiSource("https://example.test"), notifier)
    assert provider.refresh() is False
    assert provider.table.is_default
    assert "Expected a JSON object" in provider.last_error
    assert [n.message for n in notifier.drain()] == [FETCH_FAILED_MESSAGE]


def test_http_error_status_is_a_failed_refresh(monkeypatch):
    serve(monkeypatch, error=urllib.error.HTTPError(URL, 500, "Server Error", None, io.BytesIO(b"")))
    notifier = Notifier()
    provider = RateProvider(ExchangeRateApiSource("https://example.test"), notifier)
    assert provider.refresh() is False
    assert [n.level for n in notifier.drain()] == ["error"]