"""JSON answers in the shape expected by Ant Design front ends."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from adminsdk.context import RequestContext, generate_msg_id_from_context


class ShowType(str, enum.Enum):
    """How the front end shows an error."""

    SILENT = "0"
    MESSAGE_WARN = "1"
    MESSAGE_ERROR = "2"
    NOTIFICATION = "4"
    PAGE = "9"


def _plain(value: Any) -> Any:
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


def _text(value: Any) -> str:
    return str(getattr(value, "value", value))


@dataclass
class AntdResponse:
    """The body of an answer; empty fields are left out."""

    success: bool = False
    error_code: str = ""
    error_message: str = ""
    show_type: str = ""
    trace_id: str = ""
    host: str = ""
    status: str = ""
    data: Any = None

    def set_code(self, code: int) -> None:
        """Record a non-success code as 'C<code>'; 200 and 0 are not recorded."""
        if code not in (200, 0):
            self.error_code = f"C{code}"

    def set_trace_id(self, trace_id: str) -> None:
        self.trace_id = trace_id

    def set_msg(self, msg: str) -> None:
        self.error_message = msg

    def set_data(self, data: Any) -> None:
        self.data = data

    def set_success(self, success: bool) -> None:
        self.success = success

    def clone(self) -> AntdResponse:
        return dataclasses.replace(self)

    def _base_dict(self) -> dict[str, Any]:
        pairs = (
            ("success", self.success),
            ("errorCode", self.error_code),
            ("errorMessage", self.error_message),
            ("showType", self.show_type),
            ("traceId", self.trace_id),
            ("host", self.host),
            ("status", self.status),
        )
        return {key: value for key, value in pairs if value}

    def to_dict(self) -> dict[str, Any]:
        body = self._base_dict()
        if self.data is not None:
            body["data"] = _plain(self.data)
        return body


@dataclass
class _AntdPage(AntdResponse):
    total: int = 0
    current: int = 0
    page_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        for key, value in (("total", self.total), ("current", self.current), ("pageSize", self.page_size)):
            if value:
                body[key] = value
        return body


@dataclass
class _AntdList(AntdResponse):
    items: Any = None
    total: int = 0
    current: int = 0
    page_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        body = self._base_dict()
        listing: dict[str, Any] = {}
        if self.items is not None:
            listing["list"] = _plain(self.items)
        for key, value in (("total", self.total), ("current", self.current), ("pageSize", self.page_size)):
            if value:
                listing[key] = value
        body["data"] = listing
        return body


def _finish(ctx: RequestContext, res: AntdResponse, status: Any) -> None:
    ctx.set("result", res)
    ctx.set("status", status)
    ctx.abort_with_status_json(int(HTTPStatus.OK), res.to_dict())


def error(ctx: RequestContext, err_code: str, err_msg: str, show_type: str) -> None:
    """Answer with a failure and the given error code."""
    res = AntdResponse(success=False)
    if err_msg:
        res.error_message = err_msg
    if show_type:
        res.show_type = _text(show_type)
    res.trace_id = generate_msg_id_from_context(ctx)
    res.error_code = err_code
    _finish(ctx, res, err_code)


def _success(ctx: RequestContext, data: Any) -> None:
    res = AntdResponse(success=True, status="done", data=data)
    res.trace_id = generate_msg_id_from_context(ctx)
    _finish(ctx, res, int(HTTPStatus.OK))


def ok(ctx: RequestContext, data: Any) -> None:
    """Answer with data."""
    _success(ctx, data)


def up_file_ok(ctx: RequestContext, data: Any) -> None:
    """Answer to a completed upload."""
    _success(ctx, data)


def page_ok(ctx: RequestContext, result: Any, total: int, current: int, page_size: int) -> None:
    """Answer with a page of results beside its position."""
    res = _AntdPage(success=True, data=result, total=total, current=current, page_size=page_size)
    res.trace_id = generate_msg_id_from_context(ctx)
    _finish(ctx, res, int(HTTPStatus.OK))


def list_ok(ctx: RequestContext, result: Any, total: int, current: int, page_size: int) -> None:
    """Answer with a page of results nested under 'data'."""
    res = _AntdList(success=True, items=result, total=total, current=current, page_size=page_size)
    res.trace_id = generate_msg_id_from_context(ctx)
    _finish(ctx, res, int(HTTPStatus.OK))


def custom(ctx: RequestContext, data: dict[str, Any]) -> None:
    """Answer with a caller-built body, adding the trace id."""
    data["traceId"] = generate_msg_id_from_context(ctx)
    ctx.set("result", data)
    ctx.abort_with_status_json(int(HTTPStatus.OK), data)