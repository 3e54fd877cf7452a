"""Small conversions between numbers, strings, id lists and objects."""

from __future__ import annotations

import dataclasses
import enum
import inspect
import json
import math
import re
import types
import typing
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from adminsdk.context import RequestContext

MYSQL = "mysql"
SQLITE = "sqlite3"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)

_BUILTIN_TYPES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "bytes": bytes,
    "list": list,
    "dict": dict,
    "tuple": tuple,
    "set": set,
    "frozenset": frozenset,
    "object": object,
    "None": type(None),
    "NoneType": type(None),
    "Any": Any,
    "Optional": typing.Optional,
    "Union": typing.Union,
    "List": typing.List,
    "Dict": typing.Dict,
}


def _split_top(text: str, sep: str) -> list[str]:
    """Split text on sep where it is not inside square brackets."""
    parts: list[str] = []
    depth = 0
    start = 0
    for pos, char in enumerate(text):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == sep and depth == 0:
            parts.append(text[start:pos].strip())
            start = pos + 1
    parts.append(text[start:].strip())
    return parts


def _parse_annotation(text: str, namespace: dict[str, Any]) -> Any:
    text = text.strip().strip("'\"")
    options = _split_top(text, "|")
    if len(options) > 1:
        return typing.Union[tuple(_parse_annotation(option, namespace) for option in options)]
    if text.endswith("]") and "[" in text:
        head, _, inner = text[:-1].partition("[")
        args = tuple(_parse_annotation(arg, namespace) for arg in _split_top(inner, ","))
        origin = _parse_annotation(head, namespace)
        if origin is typing.Optional:
            return typing.Union[args[0], None]
        try:
            return origin[args]
        except TypeError:
            return Any
    name = text.rsplit(".", 1)[-1]
    return namespace.get(name, Any)


def _resolve_annotation(annotation: Any, owner: type) -> Any:
    """Turn a string annotation into a type, looked up in the owner's module."""
    if not isinstance(annotation, str):
        return annotation
    module = inspect.getmodule(owner)
    namespace = dict(_BUILTIN_TYPES)
    if module is not None:
        namespace.update(vars(module))
    return _parse_annotation(annotation, namespace)


def _class_hints(cls: type) -> dict[str, Any]:
    """Annotations of a class and its bases, with string annotations resolved."""
    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        for name, annotation in vars(klass).get("__annotations__", {}).items():
            hints[name] = _resolve_annotation(annotation, klass)
    return hints


class Mode(str, enum.Enum):
    """Run mode of the application."""

    DEV = "dev"
    TEST = "test"
    PROD = "prod"

    def __str__(self) -> str:
        return self.value


@dataclass
class Ids:
    """A batch of integer ids."""

    ids: list[int] = field(default_factory=list)


def int_to_string(value: int) -> str:
    return str(value)


def uint_to_string(value: int) -> str:
    return str(value)


def int64_to_string(value: int) -> str:
    return str(value)


def round_to(value: float, digits: int) -> float:
    """Round half up to the given number of decimal digits."""
    scale = 10.0**digits
    return math.trunc((value + 0.5 / scale) * scale) / scale


def string_to_int(text: str) -> int:
    """Parse a decimal integer with an optional sign; nothing else is accepted."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    return int(text)


def get_current_time_str() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def get_current_time() -> datetime:
    return datetime.now().astimezone()


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def struct_to_json_str(obj: Any) -> str:
    """Serialise an object, dataclasses included, to compact JSON."""
    return json.dumps(obj, default=_json_default, ensure_ascii=False, separators=(",", ":"))


def ids_str_to_ids_int_group_str(keys: str) -> list[int]:
    """Split a comma-separated id list; unparsable entries become 0."""
    ids = []
    for part in keys.split(","):
        try:
            ids.append(string_to_int(part))
        except ValueError:
            ids.append(0)
    return ids


def ids_str_to_ids_int_group(key: str, ctx: RequestContext) -> list[int]:
    """Parse the comma-separated ids held in a route parameter."""
    return ids_str_to_ids_int_group_str(ctx.param(key))


def _field_names(obj: Any) -> list[str]:
    if dataclasses.is_dataclass(obj):
        return [f.name for f in dataclasses.fields(obj)]
    return list(vars(obj))


def _assignable(value: Any, expected: Any) -> bool:
    if expected is None or expected is Any:
        return True
    origin = typing.get_origin(expected)
    if origin in (typing.Union, types.UnionType):
        return any(_assignable(value, arg) for arg in typing.get_args(expected))
    target = origin or expected
    if isinstance(target, type):
        return isinstance(value, target)
    return True


def translate(source: Any, target: Any) -> None:
    """Copy fields that share a name and a compatible type from source to target."""
    target_names = set(_field_names(target))
    hints = _class_hints(type(target))
    for name in _field_names(source):
        if name not in target_names:
            continue
        value = getattr(source, name)
        if _assignable(value, hints.get(name)):
            setattr(target, name, value)