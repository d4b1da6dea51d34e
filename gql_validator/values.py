"""Argument values carried by query nodes."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class StringValue:
    """String literal (also used for ID and ISO8601 scalars)."""

    value: str


@dataclass(frozen=True)
class IntValue:
    """Integer literal."""

    value: int


@dataclass(frozen=True)
class FloatValue:
    """Float literal, including arbitrary-precision decimals."""

    value: Union[float, Decimal]


@dataclass(frozen=True)
class BooleanValue:
    """Boolean literal."""

    value: bool


@dataclass(frozen=True)
class EnumValue:
    """Reference to an enum value by name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ObjectValue:
    """Input object literal, an ordered mapping of field name to value."""

    fields: tuple[tuple[str, "Value"], ...] = ()

    def items(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


@dataclass(frozen=True)
class ListValue:
    """List literal."""

    items: tuple["Value", ...] = ()

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class NullValue:
    """Explicit null."""


Value = Union[
    StringValue,
    IntValue,
    FloatValue,
    BooleanValue,
    EnumValue,
    ObjectValue,
    ListValue,
    NullValue,
]

VALUE_TYPES = (
    StringValue,
    IntValue,
    FloatValue,
    BooleanValue,
    EnumValue,
    ObjectValue,
    ListValue,
    NullValue,
)


def to_value(obj: Any) -> Value:
    """
    Convert a plain Python object into a Value.

    Values pass through unchanged. bool is checked before int since it is an
    int subclass; dicts keep their insertion order.

    Raises:
        TypeError: If the object has no value counterpart
    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    if obj is None:
        return NullValue()
    if isinstance(obj, bool):
        return BooleanValue(obj)
    if isinstance(obj, int):
        return IntValue(obj)
    if isinstance(obj, (float, Decimal)):
        return FloatValue(obj)
    if isinstance(obj, str):
        return StringValue(obj)
    if isinstance(obj, dict):
        return ObjectValue(tuple((str(k), to_value(v)) for k, v in obj.items()))
    if isinstance(obj, (list, tuple)):
        return ListValue(tuple(to_value(v) for v in obj))
    raise TypeError(f"Unsupported argument value of type '{type(obj).__name__}'")


def kind_name(value: Value) -> str:
    """Human-readable name of a value's kind, used in mismatch messages."""
    return type(value).__name__.replace("Value", "") or type(value).__name__
