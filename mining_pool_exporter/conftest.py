import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest
import requests


def make_response(status_code=200, payload=None, text=None, url="http://upstream.test/"):
    """Build a real ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.url = url
    body = text if text is not None else json.dumps(payload)
    response._content = body.encode("utf-8")
    return response


BALANCES_PAYLOAD = {
    "getuserallbalances": {
        "version": "1.0.0",
        "runtime": 12.5,
        "data": [
            {
                "coin": "bitcoin",
                "confirmed": 1.5,
                "unconfirmed": 0.25,
                "ae_confirmed": 0.1,
                "ae_unconfirmed": 0.05,
                "exchange": 0.01
            },
            {
                "coin": "ethereum",
                "confirmed": 2.0,
                "unconfirmed": 0.0,
                "ae_confirmed": 0.0,
                "ae_unconfirmed": 0.0,
                "exchange": 0.5
            }
        ]
    }
}

PRICES_PAYLOAD = {"BTC": 0.00003, "ETH": 0.0005}


class FakeUpstream:
    """
    Stands in for both upstream APIs by replacing ``requests.Session.request``.

    A route's response may be a ``requests.Response`` or an exception to raise.
    """

    def __init__(self):
        self.calls = []
        self.balances = make_response(payload=BALANCES_PAYLOAD)
        self.prices = make_response(payload=PRICES_PAYLOAD)

    def request(self, session, method, url, params=None, **kwargs):
        self.calls.append({
            "method": method,
            "url": url,
            "params": params,
            "timeout": kwargs.get("timeout"),
            "user_agent": session.headers.get("User-Agent")
        })
        if url.endswith("/index.php"):
            result = self.balances
        elif url.endswith("/data/price"):
            result = self.prices
        else:
            raise AssertionError(f"Unexpected upstream URL {url}")

        if isinstance(result, Exception):
            raise result
        return result

    def calls_to(self, path):
        return [call for call in self.calls if call["url"].endswith(path)]


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()

    def fake_request(session, method, url, **kwargs):
        return fake.request(session, method, url, **kwargs)

    monkeypatch.setattr(requests.Session, "request", fake_request)
    return fake


@pytest.fixture
def unavailable_server():
    """Local HTTP server answering every GET with 503, recording request paths."""
    hits = []

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            hits.append(self.path)
            self.send_response(503)
            self.send_header("Content-Length", "0")
            self.end_headers()

        def log_message(self, format, *args):
            pass

    server = HTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_port}", hits
    finally:
        server.shutdown()
        server.server_close()
