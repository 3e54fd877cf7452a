"""Plain HTTP requests and address lookups."""

from __future__ import annotations

import ipaddress
import json
import logging
import socket
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

_log = logging.getLogger(__name__)

_LOCATION_URL = "https://restapi.amap.com/v5/ip"
_POST_TIMEOUT = 5.0


def _read(request: urllib.request.Request | str, timeout: float | None) -> bytes:
    try:
        if timeout is None:
            response = urllib.request.urlopen(request)
        else:
            response = urllib.request.urlopen(request, timeout=timeout)
    except urllib.error.HTTPError as exc:
        # The body of an error status is still the answer.
        with exc:
            return exc.read()
    with response:
        return response.read()


def http_get(url: str) -> str:
    """GET url and return the body as text, whatever the status."""
    request = urllib.request.Request(
        url,
        headers={"Accept": "*/*", "Content-Type": "application/json"},
        method="GET",
    )
    return _read(request, None).decode("utf-8", errors="replace")


def http_post(url: str, data: Any, content_type: str) -> bytes:
    """POST data as JSON with the given content type; return the raw body."""
    body = json.dumps(data).encode()
    request = urllib.request.Request(
        url, data=body, headers={"Content-Type": content_type}, method="POST"
    )
    return _read(request, _POST_TIMEOUT)


def get_location(ip: str, key: str) -> str:
    """Look up the public location of ip as 'country-province-city-district-isp'."""
    if ip in ("127.0.0.1", "localhost"):
        return "内部IP"
    url = f"{_LOCATION_URL}?ip={urllib.parse.quote(ip)}&type=4&key={urllib.parse.quote(key)}"
    _log.debug("url %s", url)
    try:
        with urllib.request.urlopen(url) as response:
            raw = response.read()
    except OSError as exc:
        _log.warning("location lookup failed: %s", exc)
        return "未知位置"
    try:
        decoded = json.loads(raw)
    except ValueError as exc:
        _log.warning("unmarshal failed: %s", exc)
        decoded = {}
    fields = {}
    if isinstance(decoded, dict):
        fields = {k: v for k, v in decoded.items() if isinstance(v, str)}
    parts = ("country", "province", "city", "district", "isp")
    return "-".join(fields.get(part, "") for part in parts)


def _usable(address: str) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    return ip.version == 4 and not ip.is_loopback and not ip.is_unspecified


def get_local_host() -> str:
    """Return a non-loopback IPv4 address of this machine, or ''."""
    try:
        infos = socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET)
    except OSError:
        infos = []
    for info in infos:
        address = info[4][0]
        if _usable(address):
            return address
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
            # Connecting a datagram socket sends nothing; it only picks a route.
            probe.connect(("192.0.2.1", 9))
            address = probe.getsockname()[0]
    except OSError:
        return ""
    return address if _usable(address) else ""