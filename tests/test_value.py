"""
Tests for the value model.
"""

import math

import pytest

from jon import KeyNotFound, TypeMismatch, Value, ValueKind, parse


def test_kinds_and_type_names() -> None:
    assert Value.null().kind is ValueKind.NULL
    assert Value.boolean(True).kind is ValueKind.BOOL
    assert Value.integer(1).kind is ValueKind.INT
    assert Value.floating(1.5).kind is ValueKind.FLOAT
    assert Value.string("x").kind is ValueKind.STRING
    assert Value.object().kind is ValueKind.OBJECT
    assert Value.array().kind is ValueKind.ARRAY
    assert Value.object().type_name == "object"


def test_typed_accessors() -> None:
    assert Value.boolean(False).as_bool() is False
    assert Value.integer(7).as_int() == 7
    assert Value.floating(2).as_float() == 2.0
    assert Value.string("s").as_string() == "s"
    assert Value.array([Value.null()]).as_array() == (Value.null(),)
    assert dict(Value.object({"k": Value.integer(1)}).as_object()) == {"k": Value.integer(1)}


@pytest.mark.parametrize(
    "value, accessor",
    [
        (Value.integer(1), "as_float"),
        (Value.floating(1.0), "as_int"),
        (Value.string("true"), "as_bool"),
        (Value.null(), "as_string"),
        (Value.object(), "as_array"),
        (Value.array(), "as_object"),
    ],
)
def test_accessor_type_mismatch(value: Value, accessor: str) -> None:
    with pytest.raises(TypeMismatch):
        getattr(value, accessor)()


def test_type_mismatch_message() -> None:
    with pytest.raises(TypeMismatch) as exc_info:
        Value.string("x").as_int()
    assert str(exc_info.value) == "Expected int, got string"
    assert exc_info.value.expected is ValueKind.INT
    assert exc_info.value.actual is ValueKind.STRING


def test_has_and_at() -> None:
    value = parse("{name: 'jon'}")
    assert value.has("name")
    assert not value.has("age")
    assert value.at("name").as_string() == "jon"
    assert value["name"] == Value.string("jon")

    with pytest.raises(KeyNotFound) as exc_info:
        value.at("age")
    assert exc_info.value.key == "age"


def test_has_and_at_are_object_only() -> None:
    with pytest.raises(TypeMismatch):
        Value.array().has("x")
    with pytest.raises(TypeMismatch):
        Value.integer(1).at("x")


def test_array_indexing_and_length() -> None:
    value = parse("[10, 20, 30]")
    assert value[1].as_int() == 20
    assert len(value) == 3
    assert len(parse("{a: 1}")) == 1

    with pytest.raises(TypeError):
        len(Value.integer(1))


def test_values_are_truthy() -> None:
    assert Value.null()
    assert Value.array()


def test_object_preserves_insertion_order() -> None:
    value = parse("{z: 1, a: 2, m: 3}")
    assert list(value.as_object()) == ["z", "a", "m"]


def test_object_equality_ignores_order() -> None:
    assert parse("{a: 1, b: 2}") == parse("{b: 2, a: 1}")
    assert parse("{a: 1}") != parse("{a: 1, b: 2}")


def test_array_equality_respects_order() -> None:
    assert parse("[1, 2]") != parse("[2, 1]")


def test_int_and_float_are_distinct() -> None:
    assert Value.integer(1) != Value.floating(1.0)
    assert Value.integer(1) != Value.boolean(True)


def test_nan_equals_nan() -> None:
    assert Value.floating(math.nan) == Value.floating(math.nan)
    assert Value.floating(math.nan) != Value.floating(0.0)


def test_values_are_immutable() -> None:
    value = parse("{a: [1]}")
    with pytest.raises(AttributeError):
        value.kind = ValueKind.NULL  # type: ignore[misc]
    with pytest.raises(TypeError):
        value.as_object()["b"] = Value.null()  # type: ignore[index]


def test_values_are_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(Value.integer(1))


def test_payload_must_match_kind() -> None:
    with pytest.raises(TypeError):
        Value(ValueKind.INT, "1")
    with pytest.raises(TypeError):
        Value(ValueKind.INT, True)
    with pytest.raises(TypeError):
        Value(ValueKind.OBJECT, {})
    with pytest.raises(TypeError):
        Value(ValueKind.ARRAY, [1])


def test_integer_range() -> None:
    Value.integer(2**63 - 1)
    with pytest.raises(ValueError):
        Value.integer(2**63)


def test_object_rejects_duplicate_keys() -> None:
    with pytest.raises(ValueError):
        Value.object([("a", Value.null()), ("a", Value.null())])


def test_from_python_and_back() -> None:
    data = {"name": "jon", "tags": ["a", "b"], "limits": {"cpu": 0.5, "mem": 1024}, "none": None, "on": True}
    value = Value.from_python(data)

    assert value.at("tags")[0].as_string() == "a"
    assert value.at("limits").at("cpu").kind is ValueKind.FLOAT
    assert value.at("limits").at("mem").kind is ValueKind.INT
    assert value.at("on").kind is ValueKind.BOOL
    assert value.to_python() == data


def test_from_python_rejects_unsupported_data() -> None:
    with pytest.raises(TypeError):
        Value.from_python({1: "x"})
    with pytest.raises(TypeError):
        Value.from_python({"a": object()})


def test_repr() -> None:
    assert repr(Value.null()) == "Value(null)"
    assert repr(Value.integer(3)) == "Value(int, 3)"
