"""General helpers: hashing, ids, directory listing, JSON time values and API errors."""

from __future__ import annotations

import base64
import binascii
import hashlib
import os
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from typing import Any

_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"


def hmac(data: str) -> str:
    """Return the hex MD5 digest of data."""
    return hashlib.md5(data.encode()).hexdigest()


def is_string_empty(text: str) -> bool:
    """Return True when text holds nothing but spaces."""
    return text.strip(" ") == ""


def get_uuid() -> str:
    """Return a random UUID as 32 hex digits without dashes."""
    return uuid.uuid4().hex


def path_exists(path: str) -> bool:
    try:
        os.stat(path)
    except OSError:
        return False
    return True


def base64_to_image(data: str) -> bytes:
    """Decode standard, padded base64; raise ValueError on malformed input."""
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"illegal base64 data: {exc}") from exc


def get_dir_files(directory: str) -> list[str]:
    """Return every file below directory, recursively, in name order."""
    files: list[str] = []
    for name in sorted(os.listdir(directory)):
        path = directory + os.sep + name
        if os.path.isdir(path):
            files.extend(get_dir_files(path))
        else:
            files.append(path)
    return files


def get_current_time_stamp() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def remove_rep_by_map(items: list[str]) -> list[str]:
    """Drop repeated entries, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))


@dataclass(frozen=True)
class JSONTime:
    """A timestamp that serialises as 'YYYY-MM-DD HH:MM:SS'; None is the zero time."""

    time: datetime | None = None

    def to_json(self) -> str:
        if self.time is None:
            return '""'
        return f'"{self.time.strftime(_TIME_LAYOUT)}"'

    def value(self) -> datetime | None:
        """The value to store in a database column: None for the zero time."""
        return self.time

    @classmethod
    def scan(cls, value: Any) -> JSONTime:
        """Build a JSONTime from a database value, which must be a datetime."""
        if isinstance(value, datetime):
            return cls(value)
        raise TypeError(f"can not convert {value} to timestamp")


@dataclass(eq=False)
class APIException(Exception):
    """An API error carrying the body of the JSON answer."""

    code: int
    success: bool
    msg: str
    timestamp: int = field(default_factory=lambda: int(time.time()))
    result: Any = None

    def __str__(self) -> str:
        return self.msg

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "success": self.success,
            "msg": self.msg,
            "timestamp": self.timestamp,
            "result": self.result,
        }


def _new_api_exception(code: int, msg: str, data: Any, success: bool) -> APIException:
    return APIException(code=code, success=success, msg=msg, result=data)


def server_error() -> APIException:
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    return _new_api_exception(int(status), status.phrase, None, False)


def not_found() -> APIException:
    status = HTTPStatus.NOT_FOUND
    return _new_api_exception(int(status), status.phrase, None, False)


def unknown_error(message: str) -> APIException:
    return _new_api_exception(int(HTTPStatus.FORBIDDEN), message, None, False)


def parameter_error(message: str) -> APIException:
    return _new_api_exception(int(HTTPStatus.BAD_REQUEST), message, None, False)


def auth_error(message: str) -> APIException:
    return _new_api_exception(int(HTTPStatus.BAD_REQUEST), message, None, False)


def response_json(message: str, data: Any, success: bool) -> APIException:
    return _new_api_exception(int(HTTPStatus.OK), message, data, success)