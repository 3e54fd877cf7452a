"""Per-request state shared by handlers: headers, route parameters and stored values."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

TRAFFIC_KEY = "X-Request-Id"
LOGGER_KEY = "_adminsdk-logger-request"
DB_KEY = "db"


class DBConnectionError(LookupError):
    """Raised when no database handle is attached to the request."""


@dataclass
class RequestContext:
    """The state of one HTTP request and the response being built for it."""

    method: str = "GET"
    path: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    response_headers: dict[str, str] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    status: int | None = None
    body: Any = None
    aborted: bool = False

    def get_header(self, name: str) -> str:
        """Return a request header, matched case-insensitively, or ''."""
        wanted = name.lower()
        return next(
            (value for key, value in self.headers.items() if key.lower() == wanted),
            "",
        )

    def set_header(self, name: str, value: str) -> None:
        """Set a response header; an empty value removes it."""
        if value == "":
            self.response_headers.pop(name, None)
        else:
            self.response_headers[name] = value

    def get(self, key: str) -> Any:
        """Return a value stored on the request, or None."""
        return self.values.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def set(self, key: str, value: Any) -> None:
        """Store a value on the request."""
        self.values[key] = value

    def param(self, key: str) -> str:
        """Return a route parameter, or '' when absent."""
        return self.params.get(key, "")

    def abort_with_status_json(self, status: int, body: Any) -> None:
        """Stop handling and answer with the given status and JSON body."""
        self.status = status
        self.body = body
        self.aborted = True


def generate_msg_id_from_context(ctx: RequestContext) -> str:
    """Return the request id header, creating and echoing a new one if absent."""
    request_id = ctx.get_header(TRAFFIC_KEY)
    if not request_id:
        request_id = str(uuid.uuid4())
        ctx.set_header(TRAFFIC_KEY, request_id)
    return request_id


def get_orm(ctx: RequestContext) -> Any:
    """Return the database handle stored on the request."""
    db = ctx.get(DB_KEY)
    if db is None:
        raise DBConnectionError("db connect not exist")
    return db