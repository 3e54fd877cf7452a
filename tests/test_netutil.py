import io
import ipaddress
import json
import threading
import urllib.error
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest import mock

import pytest

from adminsdk import netutil


class _Handler(BaseHTTPRequestHandler):
    def _reply(self, status, body):
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        if self.path == "/missing":
            self._reply(404, b"missing")
            return
        body = json.dumps(
            {
                "path": self.path,
                "accept": self.headers.get("Accept"),
                "content_type": self.headers.get("Content-Type"),
            }
        ).encode()
        self._reply(200, body)

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        payload = self.rfile.read(length)
        body = json.dumps(
            {"content_type": self.headers.get("Content-Type"), "body": payload.decode()}
        ).encode()
        self._reply(200, body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


def test_http_get_sends_headers(server_url):
    result = json.loads(netutil.http_get(server_url + "/hello"))
    assert result["path"] == "/hello"
    assert result["accept"] == "*/*"
    assert result["content_type"] == "application/json"


def test_http_get_returns_error_body(server_url):
    assert netutil.http_get(server_url + "/missing") == "missing"


def test_http_post_round_trip(server_url):
    data = {"name": "alice", "items": [1, 2, 3]}
    result = json.loads(netutil.http_post(server_url + "/post", data, "application/json"))
    assert result["content_type"] == "application/json"
    assert json.loads(result["body"]) == data


def test_http_get_unreachable_raises():
    with pytest.raises(OSError):
        netutil.http_get("http://127.0.0.1:1/")


def test_get_location_loopback():
    assert netutil.get_location("127.0.0.1", "placeholder") == "内部IP"
    assert netutil.get_location("localhost", "placeholder") == "内部IP"


def test_get_location_parses_answer():
    answer = {"country": "中国", "province": "p", "city": "c", "district": "d", "isp": "i"}
    fake = io.BytesIO(json.dumps(answer).encode())
    with mock.patch("urllib.request.urlopen", return_value=fake) as opened:
        result = netutil.get_location("8.8.8.8", "placeholder")
    assert result == "中国-p-c-d-i"
    url = opened.call_args[0][0]
    assert "ip=8.8.8.8" in url
    assert "key=placeholder" in url


def test_get_location_failure():
    with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("down")):
        assert netutil.get_location("8.8.8.8", "placeholder") == "未知位置"


def test_get_location_bad_json():
    with mock.patch("urllib.request.urlopen", return_value=io.BytesIO(b"not json")):
        assert netutil.get_location("8.8.8.8", "placeholder") == "----"


def test_get_local_host_is_non_loopback_ipv4():
    address = netutil.get_local_host()
    assert address == "" or (
        ipaddress.ip_address(address).version == 4
        and not ipaddress.ip_address(address).is_loopback
    )