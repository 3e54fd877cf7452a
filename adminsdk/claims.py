"""Typed access to JWT claims and to the user details they carry on a request."""

from __future__ import annotations

import decimal
import logging
import math
from collections.abc import Mapping
from typing import Any

from adminsdk.context import RequestContext
from adminsdk.convert import get_current_time_str, string_to_int

JWT_PAYLOAD_KEY = "JWT_PAYLOAD"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MOD = 2**64

_log = logging.getLogger(__name__)


class ClaimsError(ValueError):
    """Raised when a claim is missing or cannot be converted."""


def _invalid_value(value: Any) -> ClaimsError:
    return ClaimsError(f"invalid value '{value}' type '{type(value).__name__}'")


def _check_range(number: int) -> int:
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ClaimsError(f"value out of range: {number}")
    return number


def _format_float(value: float) -> str:
    """Shortest representation, switching to exponent form outside 1e-4..1e6."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"
    _, digit_tuple, exponent = decimal.Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    point = len(digit_tuple) + exponent
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return sign + digits + "0" * (point - len(digits))
    return f"{sign}{digits[:point]}.{digits[point:]}"


class MapClaims(dict):
    """The claims of a token, keyed by name."""

    def _value(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise ClaimsError(f"invalid key '{key}'")
        return value

    def get_int64(self, key: str) -> int:
        """Read a claim as a signed 64-bit integer."""
        value = self._value(key)
        if isinstance(value, bool):
            raise _invalid_value(value)
        if isinstance(value, int):
            return _check_range(value)
        if isinstance(value, float):
            try:
                return int(value)
            except (ValueError, OverflowError) as exc:
                raise ClaimsError(str(exc)) from exc
        if isinstance(value, decimal.Decimal):
            if value != value.to_integral_value():
                raise ClaimsError(f"invalid syntax: {value}")
            return _check_range(int(value))
        if isinstance(value, str):
            try:
                return _check_range(string_to_int(value))
            except ClaimsError:
                raise
            except ValueError as exc:
                raise ClaimsError(str(exc)) from exc
        raise _invalid_value(value)

    def get_int(self, key: str) -> int:
        return self.get_int64(key)

    def get_uint64(self, key: str) -> int:
        """Read a claim as an unsigned 64-bit integer; negatives wrap around."""
        return self.get_int64(key) % _UINT64_MOD

    def get_string(self, key: str) -> str:
        """Read a claim as text; missing or unsupported values give ''."""
        value = self.get(key)
        if value is None or isinstance(value, bool):
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, (int, decimal.Decimal)):
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        _log.debug("claim %s has unsupported value %r", key, value)
        return ""

    def exp(self) -> int:
        return self.get_int64("exp")

    def orig_iat(self) -> int:
        return self.get_int64("orig_iat")

    def identity(self) -> int:
        return self.get_int64("identity")


def _warn(ctx: RequestContext, what: str) -> None:
    _log.warning("%s [WARING] %s %s %s", get_current_time_str(), ctx.method, ctx.path, what)


def extract_claims(ctx: RequestContext) -> MapClaims:
    """Return the claims stored on the request, or empty claims."""
    claims = ctx.get(JWT_PAYLOAD_KEY)
    if claims is None:
        return MapClaims()
    if isinstance(claims, MapClaims):
        return claims
    if isinstance(claims, Mapping):
        return MapClaims(claims)
    raise TypeError(f"claims of type {type(claims).__name__} are not a mapping")


def get(ctx: RequestContext, key: str) -> Any:
    """Return one claim, or None with a warning when it is missing."""
    value = extract_claims(ctx).get(key)
    if value is not None:
        return value
    _warn(ctx, f"Get 缺少 {key}")
    return None


def _int_claim(ctx: RequestContext, key: str, caller: str) -> int:
    try:
        return extract_claims(ctx).get_int64(key)
    except ClaimsError as exc:
        _warn(ctx, f"{caller} 缺少 {key} error: {exc}")
        return 0


def get_user_id(ctx: RequestContext) -> int:
    return _int_claim(ctx, "identity", "GetUserId")


def get_user_id_str(ctx: RequestContext) -> str:
    return extract_claims(ctx).get_string("identity")


def get_user_name(ctx: RequestContext) -> str:
    return extract_claims(ctx).get_string("nice")


def get_role_name(ctx: RequestContext) -> str:
    return extract_claims(ctx).get_string("rolekey")


def get_role_id(ctx: RequestContext) -> int:
    return _int_claim(ctx, "roleid", "GetRoleId")


def get_dept_id(ctx: RequestContext) -> int:
    return _int_claim(ctx, "deptid", "GetDeptId")


def get_dept_name(ctx: RequestContext) -> str:
    return extract_claims(ctx).get_string("deptkey")