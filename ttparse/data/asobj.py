"""Conversion of decoded font objects to JSON-serializable data."""

import dataclasses
import functools
from typing import Any


@functools.singledispatch
def asobj(obj: Any) -> Any:
    """Convert an object to a JSON-serializable object (dict, list,
    str, int, float, bool or None)."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            field.name: asobj(getattr(obj, field.name))
            for field in dataclasses.fields(obj)
        }
    return obj


@asobj.register(list)
@asobj.register(tuple)
def asobj_list(obj: Any) -> list:
    return [asobj(v) for v in obj]


@asobj.register
def asobj_dict(obj: dict) -> dict:
    return {k: asobj(v) for k, v in obj.items()}


@asobj.register
def asobj_bytes(obj: bytes) -> str:
    # Tags and vendor IDs are ASCII, mostly
    return obj.decode("latin-1")
