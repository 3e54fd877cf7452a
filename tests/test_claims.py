import logging

import pytest

from adminsdk import claims
from adminsdk.context import RequestContext


def _ctx(payload):
    ctx = RequestContext(method="GET", path="/api/v1/user")
    ctx.set(claims.JWT_PAYLOAD_KEY, payload)
    return ctx


def test_int64_from_int_and_string():
    data = claims.MapClaims({"a": 42, "b": "-17"})
    assert data.get_int64("a") == 42
    assert data.get_int64("b") == -17


def test_int64_from_float_truncates():
    data = claims.MapClaims({"a": 3.9})
    assert data.get_int64("a") == 3


def test_int64_missing_key():
    with pytest.raises(claims.ClaimsError, match="invalid key 'nope'"):
        claims.MapClaims().get_int64("nope")


def test_int64_bad_type_and_bad_text():
    data = claims.MapClaims({"list": [1], "text": "abc", "flag": True})
    with pytest.raises(claims.ClaimsError, match="invalid value"):
        data.get_int64("list")
    with pytest.raises(ValueError):
        data.get_int64("text")
    with pytest.raises(claims.ClaimsError):
        data.get_int64("flag")


def test_named_claims():
    data = claims.MapClaims({"exp": 100, "orig_iat": 50, "identity": "7"})
    assert data.exp() == 100
    assert data.orig_iat() == 50
    assert data.identity() == 7


def test_int_and_uint64_agree_for_positive():
    data = claims.MapClaims({"n": "123"})
    assert data.get_int("n") == data.get_uint64("n") == 123


def test_uint64_wraps_negative_to_non_negative():
    data = claims.MapClaims({"n": -1})
    assert data.get_uint64("n") > data.get_int64("n")
    assert data.get_uint64("n") >= 0


def test_get_string_variants():
    data = claims.MapClaims({"s": "alice", "i": 42, "f": 1.5, "l": [1], "b": False})
    assert data.get_string("s") == "alice"
    assert data.get_string("i") == "42"
    assert data.get_string("f") == "1.5"
    assert data.get_string("l") == ""
    assert data.get_string("b") == ""
    assert data.get_string("missing") == ""


def test_get_string_large_float_uses_exponent():
    data = claims.MapClaims({"f": 1234567.0, "g": 123456.0})
    assert data.get_string("f") == "1.234567e+06"
    assert data.get_string("g") == "123456"


def test_extract_claims_empty_and_mapping():
    assert claims.extract_claims(RequestContext()) == claims.MapClaims()
    extracted = claims.extract_claims(_ctx({"identity": 5}))
    assert isinstance(extracted, claims.MapClaims)
    assert extracted.identity() == 5


def test_get_present_and_missing(caplog):
    ctx = _ctx({"nice": "alice"})
    assert claims.get(ctx, "nice") == "alice"
    with caplog.at_level(logging.WARNING):
        assert claims.get(ctx, "rolekey") is None
    assert "缺少 rolekey" in caplog.text


def test_user_fields():
    ctx = _ctx(
        {
            "identity": "12",
            "nice": "alice",
            "rolekey": "admin",
            "roleid": 3,
            "deptid": "4",
            "deptkey": "sales",
        }
    )
    assert claims.get_user_id(ctx) == 12
    assert claims.get_user_id_str(ctx) == "12"
    assert claims.get_user_name(ctx) == "alice"
    assert claims.get_role_name(ctx) == "admin"
    assert claims.get_role_id(ctx) == 3
    assert claims.get_dept_id(ctx) == 4
    assert claims.get_dept_name(ctx) == "sales"


def test_user_ids_default_to_zero_when_missing():
    ctx = RequestContext()
    assert claims.get_user_id(ctx) == 0
    assert claims.get_role_id(ctx) == 0
    assert claims.get_dept_id(ctx) == 0
    assert claims.get_user_name(ctx) == ""