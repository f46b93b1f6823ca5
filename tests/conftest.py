"""
Pytest configuration and fixtures for cookie_session tests.
"""
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qsl, urlsplit

import pytest


class _CookieHandler(BaseHTTPRequestHandler):
    """Sets cookies from the query string and echoes what the client sent."""

    def do_GET(self):
        url = urlsplit(self.path)
        params = parse_qsl(url.query)

        if url.path == "/set":
            self.send_response(200)
            for name, value in params:
                self.send_header("Set-Cookie", f"{name}={value}; Path=/")
            self._send_json({"set": [name for name, _ in params]})
        elif url.path == "/set-and-redirect":
            self.send_response(302)
            for name, value in params:
                self.send_header("Set-Cookie", f"{name}={value}; Path=/; Max-Age=3600")
            self.send_header("Location", "/echo")
            self.send_header("Content-Length", "0")
            self.end_headers()
        elif url.path == "/echo":
            self.send_response(200)
            self._send_json(
                {
                    "cookie": self.headers.get("Cookie", ""),
                    "user_agent": self.headers.get("User-Agent", ""),
                }
            )
        else:
            self.send_response(404)
            self._send_json({"error": "not found"})

    def _send_json(self, payload):
        body = json.dumps(payload).encode("utf-8")
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture(scope="session")
def server_url():
    """Base URL of a local HTTP server running in a background thread."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _CookieHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield f"http://127.0.0.1:{server.server_address[1]}"

    server.shutdown()
    server.server_close()


@pytest.fixture
def cookie_path(tmp_path):
    return tmp_path / "cookies.json"


@pytest.fixture
def sample_records():
    return [
        {
            "name": "sid",
            "value": "abc123",
            "domain": "example.com",
            "path": "/",
            "secure": True,
            "expires": 4102444800,
            "rest": {"HttpOnly": None},
        },
        {
            "name": "theme",
            "value": "dark",
            "domain": ".example.org",
            "path": "/app",
        },
    ]
