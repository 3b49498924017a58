from __future__ import annotations

from datetime import date

import pytest

from confdoc import DeserializeError, ParseError, SerializeError
from confdoc.codec import from_value, to_object, to_value
from confdoc.json_store import dumps_pretty, loads_object


def test_to_value_plain_and_rich():
    assert to_value({"a": [1, 2.5, None, True]}) == {"a": [1, 2.5, None, True]}
    assert to_value(date(2024, 1, 2)) == "2024-01-02"
    assert to_value({"d": {1, 2}}) in ({"d": [1, 2]}, {"d": [2, 1]})


def test_to_value_rejects_unknown():
    with pytest.raises(SerializeError):
        to_value(object())


def test_from_value():
    assert from_value("2024-01-02", date) == date(2024, 1, 2)
    assert from_value({"x": 1}) == {"x": 1}
    with pytest.raises(DeserializeError):
        from_value("x", int)


def test_to_object_copies():
    src = {"a": [{"b": 1}]}
    out = to_object(src)
    assert out == src
    out["a"][0]["b"] = 2
    assert src == {"a": [{"b": 1}]}

    with pytest.raises(SerializeError):
        to_object("not an object")


def test_loads_object():
    assert loads_object("") == {}
    assert list(loads_object('{"z": 1, "a": 2}')) == ["z", "a"]

    with pytest.raises(ParseError):
        loads_object("\n\t ")
    with pytest.raises(ParseError):
        loads_object("[]")
    with pytest.raises(ParseError):
        loads_object('{"x": Infinity}')
    with pytest.raises(ParseError):
        loads_object("{")


def test_dumps_pretty():
    assert dumps_pretty({}) == "{}"
    assert dumps_pretty({"b": 1, "a": [1]}) == '{\n  "b": 1,\n  "a": [\n    1\n  ]\n}'
    with pytest.raises(SerializeError):
        dumps_pretty({"x": float("inf")})
