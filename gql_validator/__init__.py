"""Validate GraphQL query trees against an introspected schema before sending them."""

from .query import Operation, QueryNode, mutation, query, subscription
from .report import ValidationError, ValidationReport
from .schema import Field, Schema, SchemaFormatError, SchemaType, TypeRef
from .validator import (
    QueryValidationError,
    RootTypeNotFoundError,
    ensure_valid,
    is_valid,
    validate,
    validate_operation,
)
from .values import (
    BooleanValue,
    EnumValue,
    FloatValue,
    IntValue,
    ListValue,
    NullValue,
    ObjectValue,
    StringValue,
    to_value,
)

__version__ = "0.1.0"
