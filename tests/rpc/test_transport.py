import pytest
import requests

from nethermind.evm_rpc.exceptions import TransportError
from nethermind.evm_rpc.rpc import RequestsTransport
from nethermind.evm_rpc.types.rpc import TransportArguments


class MockResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


def test_execute_posts_body(monkeypatch):
    calls = []

    def mock_request(method, url, data=None, headers=None, timeout=None):
        calls.append((method, url, data, headers, timeout))
        return MockResponse('{"jsonrpc":"2.0","id":1,"result":"0x1"}')

    transport = RequestsTransport(timeout=5)
    monkeypatch.setattr(transport.session, "request", mock_request)

    response = transport.execute(TransportArguments(url="https://node.example/rpc", body='{"id":1}'))

    assert response == '{"jsonrpc":"2.0","id":1,"result":"0x1"}'
    assert calls == [
        ("POST", "https://node.example/rpc", '{"id":1}', {"Content-Type": "application/json"}, 5),
    ]


def test_execute_returns_error_status_body(monkeypatch):
    transport = RequestsTransport()
    monkeypatch.setattr(transport.session, "request", lambda *args, **kwargs: MockResponse("", 502))

    assert transport.execute(TransportArguments(url="https://node.example/rpc", body="{}")) == ""


def test_execute_connection_error(monkeypatch):
    def mock_request(*args, **kwargs):
        raise requests.ConnectionError("Connection refused")

    transport = RequestsTransport()
    monkeypatch.setattr(transport.session, "request", mock_request)

    with pytest.raises(TransportError):
        transport.execute(TransportArguments(url="https://node.example/rpc", body="{}"))


def test_fetch_document(monkeypatch):
    transport = RequestsTransport(headers={"User-Agent": "evm-rpc"})
    monkeypatch.setattr(transport.session, "get", lambda url, timeout=None: MockResponse("[]"))

    assert transport.fetch("https://abi.example/erc20.json") == "[]"
    assert transport.session.headers["User-Agent"] == "evm-rpc"


def test_fetch_http_error(monkeypatch):
    transport = RequestsTransport()
    monkeypatch.setattr(transport.session, "get", lambda url, timeout=None: MockResponse("Not Found", 404))

    with pytest.raises(TransportError):
        transport.fetch("https://abi.example/missing.json")
