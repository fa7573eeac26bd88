"""
Value model shared by parsed documents and schemas.

A Value is a single tagged variant over seven kinds. Containers own their
children by value: objects hold a read-only ordered mapping, arrays a tuple.
Values are immutable once built.
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..const import INT_MAX, INT_MIN


class ValueKind(Enum):
    """Runtime kind of a Value; values double as schema type names."""
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"


class ValueAccessError(Exception):
    """Base class for failed typed access to a Value."""


class TypeMismatch(ValueAccessError):
    """Raised when a typed accessor is used on a Value of another kind."""

    def __init__(self, expected: ValueKind, actual: ValueKind):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected.value}, got {actual.value}")


class KeyNotFound(ValueAccessError):
    """Raised when an object has no member with the requested key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key not found: {key!r}")


def _check_payload(kind: ValueKind, data: Any) -> None:
    """Ensure the payload has the Python type required by its kind."""
    if kind is ValueKind.NULL:
        ok = data is None
    elif kind is ValueKind.BOOL:
        ok = isinstance(data, bool)
    elif kind is ValueKind.INT:
        ok = isinstance(data, int) and not isinstance(data, bool)
        if ok and not INT_MIN <= data <= INT_MAX:
            raise ValueError(f"Integer {data} is outside the signed 64-bit range")
    elif kind is ValueKind.FLOAT:
        ok = isinstance(data, float)
    elif kind is ValueKind.STRING:
        ok = isinstance(data, str)
    elif kind is ValueKind.OBJECT:
        ok = isinstance(data, MappingProxyType) and all(
            isinstance(k, str) and isinstance(v, Value) for k, v in data.items()
        )
    elif kind is ValueKind.ARRAY:
        ok = isinstance(data, tuple) and all(isinstance(v, Value) for v in data)
    else:
        raise AssertionError(f"Unhandled value kind: {kind}")

    if not ok:
        raise TypeError(f"Invalid payload for {kind.value} value: {data!r}")


@dataclass(frozen=True, eq=False)
class Value:
    """
    A node of a jon document tree.

    Build values with the kind-specific constructors:

        Value.object({"age": Value.integer(15)})
        Value.from_python({"age": 15, "tags": ["a", "b"]})

    Typed accessors (as_int, as_object, ...) raise TypeMismatch when the
    runtime kind differs.
    """

    kind: ValueKind
    data: Any = None

    def __post_init__(self):
        _check_payload(self.kind, self.data)

    # Constructors

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL)

    @classmethod
    def boolean(cls, value: bool) -> "Value":
        return cls(ValueKind.BOOL, value)

    @classmethod
    def integer(cls, value: int) -> "Value":
        return cls(ValueKind.INT, value)

    @classmethod
    def floating(cls, value: float) -> "Value":
        return cls(ValueKind.FLOAT, float(value))

    @classmethod
    def string(cls, value: str) -> "Value":
        return cls(ValueKind.STRING, value)

    @classmethod
    def object(cls, entries: Mapping[str, "Value"] | Iterable[tuple[str, "Value"]] = ()) -> "Value":
        """Build an object; member order follows the given entries."""
        members: dict[str, Value] = {}
        items = entries.items() if isinstance(entries, Mapping) else entries
        for key, value in items:
            if key in members:
                raise ValueError(f"Duplicate key: {key!r}")
            members[key] = value
        return cls(ValueKind.OBJECT, MappingProxyType(members))

    @classmethod
    def array(cls, items: Iterable["Value"] = ()) -> "Value":
        return cls(ValueKind.ARRAY, tuple(items))

    @classmethod
    def from_python(cls, obj: Any) -> "Value":
        """
        Build a Value tree from plain Python data.

        Accepts None, bool, int, float, str, dicts with string keys,
        lists and tuples. Existing Value instances are returned as is.
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.null()
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            return cls.integer(obj)
        if isinstance(obj, float):
            return cls.floating(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, Mapping):
            for key in obj:
                if not isinstance(key, str):
                    raise TypeError(f"Object keys must be strings, got {type(key).__name__}")
            return cls.object((key, cls.from_python(value)) for key, value in obj.items())
        if isinstance(obj, (list, tuple)):
            return cls.array(cls.from_python(item) for item in obj)
        raise TypeError(f"Cannot convert {type(obj).__name__} to a jon value")

    def to_python(self) -> Any:
        """Convert to plain Python data (dict, list, str, ...)."""
        if self.kind is ValueKind.OBJECT:
            return {key: value.to_python() for key, value in self.data.items()}
        if self.kind is ValueKind.ARRAY:
            return [item.to_python() for item in self.data]
        return self.data

    # Inspection

    @property
    def type_name(self) -> str:
        return self.kind.value

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def _expect(self, kind: ValueKind) -> Any:
        if self.kind is not kind:
            raise TypeMismatch(kind, self.kind)
        return self.data

    def as_bool(self) -> bool:
        return self._expect(ValueKind.BOOL)

    def as_int(self) -> int:
        return self._expect(ValueKind.INT)

    def as_float(self) -> float:
        return self._expect(ValueKind.FLOAT)

    def as_string(self) -> str:
        return self._expect(ValueKind.STRING)

    def as_array(self) -> tuple["Value", ...]:
        return self._expect(ValueKind.ARRAY)

    def as_object(self) -> Mapping[str, "Value"]:
        return self._expect(ValueKind.OBJECT)

    def has(self, key: str) -> bool:
        """Check if an object has a member with the given key."""
        return key in self.as_object()

    def at(self, key: str) -> "Value":
        """Get an object member, raising KeyNotFound if absent."""
        members = self.as_object()
        if key not in members:
            raise KeyNotFound(key)
        return members[key]

    def get(self, key: str, default: "Value | None" = None) -> "Value | None":
        """Get an object member or default."""
        return self.as_object().get(key, default)

    def __getitem__(self, item: str | int) -> "Value":
        if isinstance(item, str):
            return self.at(item)
        return self.as_array()[item]

    def __len__(self) -> int:
        if self.kind is ValueKind.OBJECT or self.kind is ValueKind.ARRAY:
            return len(self.data)
        raise TypeError(f"{self.kind.value} value has no length")

    def __bool__(self) -> bool:
        # A node is always truthy, even an empty container or a null
        return True

    # Equality

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        if self.kind is ValueKind.FLOAT and math.isnan(self.data) and math.isnan(other.data):
            return True
        if self.kind is ValueKind.OBJECT:
            # Member order is not significant for equality
            return dict(self.data) == dict(other.data)
        return self.data == other.data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.kind is ValueKind.NULL:
            return "Value(null)"
        if self.kind is ValueKind.OBJECT:
            return f"Value(object, {dict(self.data)!r})"
        if self.kind is ValueKind.ARRAY:
            return f"Value(array, {list(self.data)!r})"
        return f"Value({self.kind.value}, {self.data!r})"
