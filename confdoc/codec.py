"""Typed conversion between Python values and JSON tree values, backed by pydantic."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import JsonValue, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import DeserializeError, SerializeError

Value = None | bool | int | float | str | list[Any] | dict[str, Any]

_ANY: TypeAdapter[Any] = TypeAdapter(Any)
_OBJECT: TypeAdapter[dict[str, JsonValue]] = TypeAdapter(dict[str, JsonValue])


@lru_cache(maxsize=None)
def adapter_for(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def to_value(obj: Any) -> Value:
    """
    Convert *obj* into a tree value.

    Plain JSON values pass through; pydantic models, dataclasses, enums,
    datetimes etc. are dumped the way pydantic dumps them in JSON mode.
    """
    try:
        return _ANY.dump_python(obj, mode="json")
    except PydanticSerializationError as e:
        raise SerializeError(f"cannot serialize {type(obj).__name__}: {e}") from e


def from_value(value: Value, type_: Any = Any) -> Any:
    """Validate a tree value into *type_* (``Any`` returns it unchanged)."""
    if type_ is Any:
        return value
    try:
        return adapter_for(type_).validate_python(value)
    except ValidationError as e:
        raise DeserializeError(str(e)) from e


def to_object(obj: Any) -> dict[str, Value]:
    """
    Validate *obj* as a JSON object and return a fresh copy of it.

    Used where a whole tree is handed over (replace_all / copy_from).
    """
    try:
        return _OBJECT.validate_python(obj)
    except ValidationError as e:
        raise SerializeError(f"not a JSON object tree: {e}") from e
