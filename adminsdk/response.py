"""Standard JSON answers: success, error, paged and free-form bodies."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from adminsdk.context import RequestContext, generate_msg_id_from_context


def _plain(value: Any) -> Any:
    """Turn a value into JSON-ready builtins."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


@dataclass
class Response:
    """The body of a standard answer."""

    request_id: str = ""
    code: int = 0
    msg: str = ""
    status: str = ""
    data: Any = None

    def set_data(self, data: Any) -> None:
        self.data = data

    def set_trace_id(self, trace_id: str) -> None:
        self.request_id = trace_id

    def set_msg(self, msg: str) -> None:
        self.msg = msg

    def set_code(self, code: int) -> None:
        self.code = int(code)

    def set_success(self, success: bool) -> None:
        """Mark the answer as failed; success leaves the status untouched."""
        if not success:
            self.status = "error"

    def clone(self) -> Response:
        return dataclasses.replace(self)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.request_id:
            body["requestId"] = self.request_id
        if self.code:
            body["code"] = self.code
        if self.msg:
            body["msg"] = self.msg
        if self.status:
            body["status"] = self.status
        body["data"] = _plain(self.data)
        return body


@dataclass
class Page:
    """One page of a listing together with its position."""

    count: int = 0
    page_index: int = 0
    page_size: int = 0
    items: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "pageIndex": self.page_index,
            "pageSize": self.page_size,
            "list": _plain(self.items),
        }


DEFAULT = Response()


def _finish(ctx: RequestContext, res: Response, status: Any) -> None:
    ctx.set("result", res)
    ctx.set("status", status)
    ctx.abort_with_status_json(int(HTTPStatus.OK), res.to_dict())


def error(ctx: RequestContext, code: int, err: BaseException | None, msg: str) -> None:
    """Answer with an error; msg, when given, wins over the error text."""
    res = DEFAULT.clone()
    if err is not None:
        res.set_msg(str(err))
    if msg:
        res.set_msg(msg)
    res.set_trace_id(generate_msg_id_from_context(ctx))
    res.set_code(code)
    res.set_success(False)
    _finish(ctx, res, code)


def ok(ctx: RequestContext, data: Any, msg: str) -> None:
    """Answer with data and status 200."""
    res = DEFAULT.clone()
    res.set_data(data)
    res.set_success(True)
    if msg:
        res.set_msg(msg)
    res.set_trace_id(generate_msg_id_from_context(ctx))
    res.set_code(int(HTTPStatus.OK))
    _finish(ctx, res, int(HTTPStatus.OK))


def page_ok(
    ctx: RequestContext, result: Any, count: int, page_index: int, page_size: int, msg: str
) -> None:
    """Answer with one page of results."""
    ok(ctx, Page(count=count, page_index=page_index, page_size=page_size, items=result), msg)


def custom(ctx: RequestContext, data: dict[str, Any]) -> None:
    """Answer with a caller-built body, adding the request id."""
    data["requestId"] = generate_msg_id_from_context(ctx)
    ctx.set("result", data)
    ctx.abort_with_status_json(int(HTTPStatus.OK), data)