"""
Schema validation for jon values.

A schema is itself a jon object:

    type: 'object'
    props: {
        name: { type: 'string', minLen: 1 }
        age: { type: 'int', mini: 0, maxi: 150 }
        email: { type: 'string', nullable: true }
    }

Validation never raises for Value inputs. Every failing constraint is
recorded as a Violation with the path to the offending node.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .logging import get_logger
from .models.value import Value, ValueKind


logger = get_logger("schema")


PathElement = str | int


@dataclass(frozen=True)
class Violation:
    """A single failed constraint."""

    path: tuple[PathElement, ...]
    message: str

    def format_path(self) -> str:
        """Render the path as `props.items[2].name`, or `<root>` when empty."""
        if not self.path:
            return "<root>"

        parts: list[str] = []
        for element in self.path:
            if isinstance(element, int):
                parts.append(f"[{element}]")
            elif parts:
                parts.append(f".{element}")
            else:
                parts.append(element)
        return "".join(parts)

    def __str__(self) -> str:
        return f"{self.format_path()}: {self.message}"


@dataclass
class ValidationResult:
    """Ordered violations collected by one validation pass. Empty means valid."""

    violations: list[Violation] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def add(self, path: tuple[PathElement, ...], message: str) -> None:
        self.violations.append(Violation(path, message))

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)

    def __getitem__(self, index: int) -> Violation:
        return self.violations[index]

    def to_value(self) -> Value:
        """Express the result as a jon array of {path, message} objects."""
        return Value.array(
            Value.object({
                "path": Value.array(
                    Value.integer(p) if isinstance(p, int) else Value.string(p)
                    for p in violation.path
                ),
                "message": Value.string(violation.message),
            })
            for violation in self.violations
        )

    def __str__(self) -> str:
        return "\n".join(str(v) for v in self.violations)


@dataclass(frozen=True)
class Bounds:
    """Inclusive bound keywords applying to one value kind."""

    min_key: str
    max_key: str
    bound_kinds: tuple[ValueKind, ...]
    measure: Callable[[Value], int | float]
    label: str


BOUNDS = {
    ValueKind.INT: Bounds("mini", "maxi", (ValueKind.INT,), lambda v: v.data, "Value"),
    ValueKind.FLOAT: Bounds("minf", "maxf", (ValueKind.FLOAT, ValueKind.INT), lambda v: v.data, "Value"),
    ValueKind.STRING: Bounds("minLen", "maxLen", (ValueKind.INT,), lambda v: len(v.data), "String length"),
    ValueKind.ARRAY: Bounds("minSize", "maxSize", (ValueKind.INT,), lambda v: len(v.data), "Array size"),
    ValueKind.OBJECT: Bounds("minProps", "maxProps", (ValueKind.INT,), lambda v: len(v.data), "Property count"),
}


class SchemaValidator:
    """
    Recursive validator of a value tree against a schema tree.

    Keywords:
        type                 required; null, bool, int, float, string, object, array
        nullable             null is accepted regardless of type
        mini / maxi          int bounds
        minf / maxf          float bounds
        minLen / maxLen      string length bounds
        minSize / maxSize    array size bounds
        minProps / maxProps  object member count bounds
        items                schema for every array element
        props                schemas for object members

    When props is given the object is closed: members without a schema are
    violations, and every declared property must be present unless its
    schema is nullable.
    """

    TYPE_NAMES = {kind.value: kind for kind in ValueKind}

    def validate(self, value: Value, schema: Value) -> ValidationResult:
        result = ValidationResult()
        self._validate(value, schema, (), result)
        logger.debug(f"Validation finished with {len(result)} violation(s)")
        return result

    def _validate(
        self,
        value: Value,
        schema: Value,
        path: tuple[PathElement, ...],
        result: ValidationResult,
    ) -> None:
        expected = self._resolve_type(schema, path, result)
        if expected is None:
            return

        if self._is_nullable(schema, path, result) and value.is_null():
            return

        if value.kind is not expected:
            result.add(path, f"Expected {expected.value}, got {value.type_name}")
            return

        if expected in BOUNDS:
            self._check_bounds(value, schema, BOUNDS[expected], path, result)

        if expected is ValueKind.ARRAY:
            self._validate_items(value, schema, path, result)
        elif expected is ValueKind.OBJECT:
            self._validate_props(value, schema, path, result)

    def _resolve_type(
        self,
        schema: Value,
        path: tuple[PathElement, ...],
        result: ValidationResult,
    ) -> ValueKind | None:
        """Read the schema's type keyword, reporting malformed schemas."""
        if schema.kind is not ValueKind.OBJECT:
            result.add(path, f"Invalid schema: expected object, got {schema.type_name}")
            return None

        type_value = schema.get("type")
        if type_value is None:
            result.add(path, "Invalid schema: missing 'type'")
            return None

        if type_value.kind is not ValueKind.STRING:
            result.add(path, f"Invalid schema: 'type' must be a string, got {type_value.type_name}")
            return None

        kind = self.TYPE_NAMES.get(type_value.data)
        if kind is None:
            result.add(path, f"Invalid schema: unknown type '{type_value.data}'")
        return kind

    def _is_nullable(
        self,
        schema: Value,
        path: tuple[PathElement, ...],
        result: ValidationResult,
    ) -> bool:
        nullable = schema.get("nullable")
        if nullable is None:
            return False
        if nullable.kind is not ValueKind.BOOL:
            result.add(path, f"Invalid schema: 'nullable' must be a bool, got {nullable.type_name}")
            return False
        return nullable.data

    def _bound(
        self,
        schema: Value,
        key: str,
        bounds: Bounds,
        path: tuple[PathElement, ...],
        result: ValidationResult,
    ) -> int | float | None:
        bound = schema.get(key)
        if bound is None:
            return None
        if bound.kind not in bounds.bound_kinds:
            allowed = " or ".join(kind.value for kind in bounds.bound_kinds)
            result.add(path, f"Invalid schema: '{key}' must be {allowed}, got {bound.type_name}")
            return None
        if bound.kind is ValueKind.FLOAT and math.isnan(bound.data):
            result.add(path, f"Invalid schema: '{key}' must not be nan")
            return None
        return bound.data

    def _check_bounds(
        self,
        value: Value,
        schema: Value,
        bounds: Bounds,
        path: tuple[PathElement, ...],
        result: ValidationResult,
    ) -> None:
        """Check both inclusive bounds independently. NaN lies outside any bound."""
        measured = bounds.measure(value)
        is_nan = isinstance(measured, float) and math.isnan(measured)

        minimum = self._bound(schema, bounds.min_key, bounds, path, result)
        if minimum is not None and not is_nan and measured < minimum:
            result.add(path, f"{bounds.label} {measured} is less than minimum {minimum} ('{bounds.min_key}')")

        maximum = self._bound(schema, bounds.max_key, bounds, path, result)
        if maximum is not None and not is_nan and measured > maximum:
            result.add(path, f"{bounds.label} {measured} is greater than maximum {maximum} ('{bounds.max_key}')")

        if is_nan and (minimum is not None or maximum is not None):
            result.add(path, f"{bounds.label} nan is outside the allowed range")

    def _validate_items(
        self,
        value: Value,
        schema: Value,
        path: tuple[PathElement, ...],
        result: ValidationResult,
    ) -> None:
        items_schema = schema.get("items")
        if items_schema is None:
            return
        if items_schema.kind is not ValueKind.OBJECT:
            result.add(path, f"Invalid schema: 'items' must be an object, got {items_schema.type_name}")
            return

        for index, item in enumerate(value.data):
            self._validate(item, items_schema, path + (index,), result)

    def _validate_props(
        self,
        value: Value,
        schema: Value,
        path: tuple[PathElement, ...],
        result: ValidationResult,
    ) -> None:
        props = schema.get("props")
        if props is None:
            return
        if props.kind is not ValueKind.OBJECT:
            result.add(path, f"Invalid schema: 'props' must be an object, got {props.type_name}")
            return

        for key, member in value.data.items():
            prop_schema = props.data.get(key)
            if prop_schema is None:
                result.add(path + (key,), f"Unknown property '{key}'")
            else:
                self._validate(member, prop_schema, path + (key,), result)

        # Absent properties count as null: only nullable ones may be omitted
        for key, prop_schema in props.data.items():
            if key in value.data:
                continue
            if not self._is_optional(prop_schema):
                result.add(path + (key,), f"Missing required property '{key}'")

    @staticmethod
    def _is_optional(schema: Value) -> bool:
        if schema.kind is not ValueKind.OBJECT:
            return False
        nullable = schema.get("nullable")
        return nullable is not None and nullable.kind is ValueKind.BOOL and nullable.data


def validate(value: Value, schema: Value) -> ValidationResult:
    """
    Validate a value tree against a schema tree.

    Args:
        value: Document to check
        schema: Schema object

    Returns:
        ValidationResult; empty when the value conforms
    """
    return SchemaValidator().validate(value, schema)
