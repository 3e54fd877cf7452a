"""Choose how to bind a request to a model from the tags on its fields."""

from __future__ import annotations

import dataclasses
import enum
import threading
import types
import typing
from typing import Any

from adminsdk.convert import _class_hints


class Binding(enum.IntEnum):
    """A source a request can be bound from."""

    URI = 0
    JSON = 1
    XML = 2
    YAML = 3
    FORM = 4
    QUERY = 5


_TAGS = (
    ("json", Binding.JSON),
    ("xml", Binding.XML),
    ("yaml", Binding.YAML),
    ("form", Binding.FORM),
    ("query", Binding.QUERY),
    ("uri", Binding.URI),
)


def _model_type(model: Any) -> type:
    if isinstance(model, type) and dataclasses.is_dataclass(model):
        return model
    if dataclasses.is_dataclass(model):
        return type(model)
    raise TypeError(f"{model!r} is not a dataclass")


def _dataclass_in(annotation: Any) -> type | None:
    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        return annotation
    origin = typing.get_origin(annotation)
    if origin is None:
        return None
    args = typing.get_args(annotation)
    if origin in (typing.Union, types.UnionType, list, tuple, set, frozenset):
        return next(filter(None, map(_dataclass_in, args)), None)
    if origin is dict and len(args) == 2:
        return _dataclass_in(args[1])
    return None


def _nested_model(model: Any, fld: dataclasses.Field, hints: dict[str, Any]) -> Any:
    if not isinstance(model, type):
        value = getattr(model, fld.name, None)
        if dataclasses.is_dataclass(value):
            return value
    found = _dataclass_in(hints.get(fld.name, fld.type))
    if found is not None:
        return found
    factory = fld.default_factory
    if isinstance(factory, type) and dataclasses.is_dataclass(factory):
        return factory
    if dataclasses.is_dataclass(fld.default):
        return fld.default
    return None


class BindConstructor:
    """Resolves and caches the bindings a model needs."""

    def __init__(self) -> None:
        self._cache: dict[type, list[Binding]] = {}
        self._lock = threading.Lock()

    def get_binding_for(self, model: Any) -> list[Binding]:
        """Distinct bindings for model, in the order its fields first need them."""
        model_type = _model_type(model)
        with self._lock:
            found = self._cache.get(model_type)
        if found is None:
            found = self.resolve(model)
            with self._lock:
                self._cache[model_type] = found
        return list(dict.fromkeys(found))

    def resolve(self, model: Any) -> list[Binding]:
        """Every binding named by each field, diving into nested models."""
        model_type = _model_type(model)
        hints = _class_hints(model_type)
        found: list[Binding] = []
        for fld in dataclasses.fields(model_type):
            meta = fld.metadata
            found.extend(binding for tag, binding in _TAGS if tag in meta)
            for tag in ("binding", "validate"):
                if "dive" in str(meta.get(tag, "")):
                    nested = _nested_model(model, fld, hints)
                    if nested is not None:
                        found.extend(self.resolve(nested))
                    break
        return found


constructor = BindConstructor()