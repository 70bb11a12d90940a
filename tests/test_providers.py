# tests/test_providers.py
import pytest
import requests

from lendrate.adapters import rate_provider_client
from lendrate.adapters.config import AppConfig
from lendrate.adapters.providers import HttpRateProvider, LazyRateProvider, default_providers, make_provider
from lendrate.adapters.rate_provider_client import RateProviderClient
from lendrate.domain.errors import RateProviderError, UnknownRateProvider


class FakeResponse:
    def __init__(self, status_code=200, payload=None, headers=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def no_sleep(monkeypatch):
    waits = []
    monkeypatch.setattr(rate_provider_client.time, "sleep", waits.append)
    return waits


def _client(**kwargs):
    return RateProviderClient(base_url="https://rates.example.com/v1/", api_key="k", **kwargs)


def test_client_retries_transient_errors(monkeypatch, no_sleep):
    responses = iter([FakeResponse(503), FakeResponse(429, headers={"Retry-After": "5"}), FakeResponse(200, [])])
    seen = {}

    def fake_get(url, headers, params, timeout):
        seen.update(url=url, headers=headers, params=params)
        return next(responses)

    monkeypatch.setattr(rate_provider_client.requests, "get", fake_get)

    assert _client(max_retries=3, backoff_base_s=1.0).get("/rates", params={"loanType": "dscr"}) == []
    assert seen["url"] == "https://rates.example.com/v1/rates"
    assert seen["headers"]["Authorization"] == "Bearer k"
    assert seen["params"] == {"loanType": "dscr"}
    assert no_sleep == [1.0, 5.0]


def test_client_gives_up_after_retries(monkeypatch, no_sleep):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(rate_provider_client.requests, "get", boom)

    with pytest.raises(RateProviderError, match="failed after retries"):
        _client(max_retries=2).get("/rates")
    assert len(no_sleep) == 2


def test_client_does_not_retry_client_errors(monkeypatch, no_sleep):
    calls = []

    def fake_get(*args, **kwargs):
        calls.append(1)
        return FakeResponse(401, text="bad key")

    monkeypatch.setattr(rate_provider_client.requests, "get", fake_get)

    with pytest.raises(RateProviderError, match="401"):
        _client().get("/rates")
    assert len(calls) == 1


def test_client_rejects_non_json(monkeypatch, no_sleep):
    monkeypatch.setattr(rate_provider_client.requests, "get", lambda *a, **k: FakeResponse(200, None))
    with pytest.raises(RateProviderError, match="Non-JSON"):
        _client().get("/rates")


class CannedClient:
    def __init__(self, payload):
        self.payload = payload
        self.calls = []

    def get(self, path, params=None):
        self.calls.append((path, params))
        return self.payload


def test_http_provider_accepts_list_or_wrapped():
    rec = {"lenderId": "x"}
    assert HttpRateProvider("p", CannedClient([rec, "junk"])).fetch_latest_rates("dscr") == [rec]

    client = CannedClient({"rates": [rec]})
    assert HttpRateProvider("p", client).fetch_latest_rates("bridge") == [rec]
    assert client.calls == [("/rates", {"loanType": "bridge"})]


def test_http_provider_rejects_unexpected_payload():
    with pytest.raises(RateProviderError):
        HttpRateProvider("p", CannedClient("oops")).fetch_latest_rates("dscr")


def test_make_provider_from_config():
    cfg = AppConfig(LOANSIFTER_API_KEY="secret", PROVIDER_MAX_RETRIES=1)
    provider = make_provider("LoanSifter", cfg)

    assert provider.name == "loansifter"
    assert provider.client.api_key == "secret"
    assert provider.client.max_retries == 1
    assert provider.client.base_url == cfg.LOANSIFTER_BASE_URL


def test_make_provider_without_key_fails():
    with pytest.raises(RateProviderError, match="LENDRATE_LENDERPRICE_API_KEY"):
        make_provider("lenderprice", AppConfig(LENDERPRICE_API_KEY=None))


def test_make_provider_unknown_name():
    with pytest.raises(UnknownRateProvider):
        make_provider("bloomberg", AppConfig())


def test_default_providers_are_lazy():
    providers = default_providers(AppConfig(LOANSIFTER_API_KEY=None))

    assert set(providers) == {"loansifter", "lenderprice"}
    assert isinstance(providers["loansifter"], LazyRateProvider)
    with pytest.raises(RateProviderError):
        providers["loansifter"].fetch_latest_rates("dscr")
