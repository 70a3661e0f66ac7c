"""Tests for from_python / to_python."""

from collections import OrderedDict

import pytest

from jsobjects import (
    JSArray,
    JSBoolean,
    JSDictionary,
    JSInteger,
    JSNull,
    JSReal,
    JSString,
    from_python,
    to_python,
)


def test_from_python_scalars():
    assert from_python(None) == JSNull()
    assert from_python(True) == JSBoolean(True)
    assert from_python(7) == JSInteger(7)
    assert from_python(7.5) == JSReal(7.5)
    assert from_python("s") == JSString("s")

def test_bool_is_not_integer():
    assert isinstance(from_python(False), JSBoolean)

def test_from_python_containers():
    node = from_python({"a": [1, (2, 3)], "b": OrderedDict([("x", None)])})
    assert isinstance(node, JSDictionary)
    assert node.get("a") == JSArray([JSInteger(1), JSArray([JSInteger(2), JSInteger(3)])])
    assert list(node.get("b")) == ["x"]

def test_from_python_result_is_unowned():
    assert from_python({"a": 1}).owner is None

def test_from_python_rejects_unknown_types():
    with pytest.raises(TypeError):
        from_python({1, 2})
    with pytest.raises(TypeError):
        from_python({1: "non-str key"})

def test_from_python_rejects_big_integers():
    with pytest.raises(OverflowError):
        from_python(2 ** 64)

def test_to_python_inverse():
    data = {"a": [1, 2.5, "x", True, None], "b": {}}
    assert to_python(from_python(data)) == data

def test_to_python_rejects_non_nodes():
    with pytest.raises(TypeError):
        to_python(object())

def test_deeply_nested_data_converts_both_ways():
    data = []
    for _ in range(3000):
        data = [data, {"d": None}]
    node = from_python(data)
    back = to_python(node)
    depth = 0
    while back:
        assert back[1] == {"d": None}
        back = back[0]
        depth += 1
    assert depth == 3000
