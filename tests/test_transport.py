import pytest
import requests

from x_client_transaction.config import USER_AGENT, TransactionConfig
from x_client_transaction.errors import TransportError
from x_client_transaction.transport.http import HttpTransport


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.requests = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.error:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def test_get_returns_status_and_text():
    session = FakeSession(FakeResponse(200, "<html></html>"))
    transport = HttpTransport(TransactionConfig(timeout=5), session=session)
    assert transport.get("https://x.com") == (200, "<html></html>")
    assert session.requests == [("https://x.com", 5)]


def test_browser_headers_applied():
    session = FakeSession(FakeResponse(200, ""))
    HttpTransport(session=session)
    assert session.headers["user-agent"] == USER_AGENT


def test_non_200_is_returned_not_raised():
    transport = HttpTransport(session=FakeSession(FakeResponse(429, "rate limited")))
    assert transport.get("https://x.com") == (429, "rate limited")


def test_request_exception_becomes_transport_error():
    error = requests.ConnectionError("dns failure")
    transport = HttpTransport(session=FakeSession(error=error))
    with pytest.raises(TransportError) as exc:
        transport.get("https://x.com")
    assert exc.value.url == "https://x.com"
    assert exc.value.__cause__ is error


def test_context_manager_closes_session():
    session = FakeSession(FakeResponse(200, ""))
    with HttpTransport(session=session) as transport:
        transport.get("https://x.com")
    assert session.closed


def test_default_session_is_requests():
    transport = HttpTransport()
    assert isinstance(transport._session, requests.Session)
    transport.close()


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("X_TXID_HOME_URL", "https://example.test")
    monkeypatch.setenv("X_TXID_USER_AGENT", "test-agent/1.0")
    monkeypatch.setenv("X_TXID_TIMEOUT", "7.5")
    cfg = TransactionConfig.from_env()
    assert cfg.home_url == "https://example.test"
    assert cfg.headers["user-agent"] == "test-agent/1.0"
    assert cfg.timeout == 7.5


def test_config_from_env_defaults(monkeypatch):
    for name in ("X_TXID_HOME_URL", "X_TXID_USER_AGENT", "X_TXID_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    cfg = TransactionConfig.from_env()
    assert cfg == TransactionConfig()
