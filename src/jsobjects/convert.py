"""Conversion between value trees and plain Python data.

Both directions walk containers with an explicit stack, so deeply nested
data converts without hitting the recursion limit.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .values import (
    JSArray,
    JSBoolean,
    JSDictionary,
    JSInteger,
    JSNull,
    JSObject,
    JSReal,
    JSString,
)


def from_python(obj: Any) -> JSObject:
    """Build a fresh, unowned tree from plain Python data.

    - None → JSNull, bool → JSBoolean, int → JSInteger, float → JSReal,
      str → JSString
    - list / tuple → JSArray
    - Mapping with str keys → JSDictionary (iteration order kept)
    """
    root = _node_for(obj)
    pending: list[tuple[Any, JSObject]] = [(obj, root)]

    while pending:
        data, node = pending.pop()
        if isinstance(node, JSArray):
            for item in data:
                child = _node_for(item)
                node.append(child)
                pending.append((item, child))
        elif isinstance(node, JSDictionary):
            for key, value in data.items():
                child = _node_for(value)
                node.set(key, child)
                pending.append((value, child))

    return root


def _node_for(obj: Any) -> JSObject:
    """Scalar node for *obj*, or an empty container to be filled."""
    if obj is None:
        return JSNull()
    if isinstance(obj, bool):
        return JSBoolean(obj)
    if isinstance(obj, int):
        return JSInteger(obj)
    if isinstance(obj, float):
        return JSReal(obj)
    if isinstance(obj, str):
        return JSString(obj)
    if isinstance(obj, (list, tuple)):
        return JSArray()
    if isinstance(obj, Mapping):
        return JSDictionary()
    raise TypeError(f"cannot convert {type(obj).__name__} to a JSObject")


def to_python(node: JSObject) -> Any:
    """Return plain dict / list / scalar data equal to *node*."""
    root = _data_for(node)
    pending: list[tuple[JSObject, Any]] = [(node, root)]

    while pending:
        source, data = pending.pop()
        if isinstance(source, JSArray):
            for item in source:
                value = _data_for(item)
                data.append(value)
                pending.append((item, value))
        elif isinstance(source, JSDictionary):
            for key, item in source.items():
                value = _data_for(item)
                data[key] = value
                pending.append((item, value))

    return root


def _data_for(node: JSObject) -> Any:
    if isinstance(node, JSDictionary):
        return {}
    if isinstance(node, JSArray):
        return []
    if isinstance(node, (JSInteger, JSReal, JSString, JSBoolean)):
        return node.value
    if isinstance(node, JSNull):
        return None
    raise TypeError(f"cannot convert {type(node).__name__} to Python data")
