import uuid

import pytest

from adminsdk.context import (
    DB_KEY,
    TRAFFIC_KEY,
    DBConnectionError,
    RequestContext,
    generate_msg_id_from_context,
    get_orm,
)


def test_get_header_is_case_insensitive():
    ctx = RequestContext(headers={"x-request-id": "abc"})
    assert ctx.get_header(TRAFFIC_KEY) == "abc"


def test_get_header_missing_is_empty():
    assert RequestContext().get_header("Accept") == ""


def test_generate_msg_id_uses_existing_header():
    ctx = RequestContext(headers={TRAFFIC_KEY: "req-1"})
    assert generate_msg_id_from_context(ctx) == "req-1"
    assert TRAFFIC_KEY not in ctx.response_headers


def test_generate_msg_id_creates_uuid_and_sets_response_header():
    ctx = RequestContext()
    request_id = generate_msg_id_from_context(ctx)
    assert str(uuid.UUID(request_id)) == request_id
    assert ctx.response_headers[TRAFFIC_KEY] == request_id


def test_get_orm_missing_raises():
    with pytest.raises(DBConnectionError, match="db connect not exist"):
        get_orm(RequestContext())


def test_get_orm_returns_stored_handle():
    ctx = RequestContext()
    handle = object()
    ctx.set(DB_KEY, handle)
    assert get_orm(ctx) is handle


def test_set_and_get_values():
    ctx = RequestContext()
    ctx.set("k", [1, 2])
    assert ctx.get("k") == [1, 2]
    assert "k" in ctx
    assert ctx.get("missing") is None


def test_param_lookup():
    ctx = RequestContext(params={"id": "7"})
    assert ctx.param("id") == "7"
    assert ctx.param("other") == ""


def test_abort_with_status_json():
    ctx = RequestContext()
    ctx.abort_with_status_json(200, {"code": 200})
    assert ctx.aborted is True
    assert ctx.status == 200
    assert ctx.body == {"code": 200}


def test_set_header_empty_removes():
    ctx = RequestContext()
    ctx.set_header("A", "1")
    ctx.set_header("A", "")
    assert "A" not in ctx.response_headers