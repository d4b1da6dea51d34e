"""Schema-driven query validation."""

import logging
from typing import Union

from .query import DIRECTIVE_PREFIX, Operation, QueryNode
from .report import ValidationError, ValidationReport
from .schema import Field, Schema, SchemaType
from .values import (
    BooleanValue,
    EnumValue,
    FloatValue,
    IntValue,
    ListValue,
    ObjectValue,
    StringValue,
    Value,
    kind_name,
)

logger = logging.getLogger(__name__)

STRING_SCALAR_TYPES = frozenset({"String", "ID", "ISO8601DateTime", "ISO8601Date"})
KNOWN_TYPES = STRING_SCALAR_TYPES | {"Int", "Float", "Boolean", "Hash"}
KNOWN_KINDS = frozenset({"INPUT_OBJECT", "ENUM"})
OBJECT_KINDS = frozenset({"OBJECT", "INTERFACE"})
DIRECTIVES = ("@include", "@skip")

Findings = list[ValidationError]


class RootTypeNotFoundError(LookupError):
    """The schema has no root type for the requested operation."""


class QueryValidationError(Exception):
    """Raised by `ensure_valid` when a query does not match the schema."""

    def __init__(self, report: ValidationReport):
        self.report = report
        errors = "\n  - ".join(report.messages)
        super().__init__(
            "Validation Error: query is invalid - HTTP Request not sent.\n"
            "\n"
            "Errors:\n"
            f"  - {errors}\n"
        )


def validate(schema: Schema, operation_kind: str, root: Union[QueryNode, Operation]) -> ValidationReport:
    """
    Validate a query tree against a schema.

    Every top-level selection is checked independently and all findings are
    collected; only a missing root type aborts the call.

    Args:
        schema: Introspected schema
        operation_kind: "query", "mutation" or "subscription"
        root: Root node (or Operation) whose children are the top-level selections

    Returns:
        ValidationReport with findings in traversal order

    Raises:
        RootTypeNotFoundError: If the schema has no root type for the operation
    """
    root_type = schema.type_named(schema.entry_type_name(operation_kind), ignore_case=True)
    if root_type is None:
        raise RootTypeNotFoundError(f"Root type not found for '{operation_kind}'")

    logger.debug("Validating %s against root type '%s'", operation_kind, root_type.name)
    walker = _Walker(schema)
    errors = []
    for node in root.children:
        errors.extend(walker.node(root_type, node, ()))

    logger.debug("Validation of %s finished with %d error(s)", operation_kind, len(errors))
    return ValidationReport(errors=tuple(errors), operation=operation_kind)


def validate_operation(schema: Schema, operation: Operation) -> ValidationReport:
    """Validate an Operation using its own kind."""
    return validate(schema, operation.kind, operation)


def is_valid(schema: Schema, operation: Operation) -> bool:
    return validate_operation(schema, operation).valid


def ensure_valid(schema: Schema, operation: Operation) -> ValidationReport:
    """
    Validate an operation before it is sent.

    Raises:
        QueryValidationError: If the report contains any error
    """
    report = validate_operation(schema, operation)
    if not report.valid:
        raise QueryValidationError(report)
    return report


class _Walker:
    """Recursive matcher; every step returns its findings instead of raising."""

    def __init__(self, schema: Schema):
        self.schema = schema

    def node(self, parent_type: SchemaType, node: QueryNode, path: tuple[str, ...]) -> Findings:
        path = path + (node.name,)
        out = self.directives(node, path)

        if node.is_fragment:
            target = node.fragment_type
            # Fragment children are not checked against the matched type.
            if target not in parent_type.possible_types:
                out.append(ValidationError(f"Match type '{target}' invalid", path))
            return out

        field_name = node.field_name
        field_def = parent_type.field(field_name)
        if field_def is None:
            out.append(ValidationError(f"Node type not found for '{field_name}'", path))
            return out

        out.extend(self.params(field_def, node, path))

        resolved = self.schema.resolve(field_def.type)
        if resolved is None:
            out.append(ValidationError(f"Node type not found for '{field_name}'", path))
            return out

        if resolved.kind in OBJECT_KINDS and not node.children:
            out.append(ValidationError(f"Invalid object for node '{node.name}'", path))

        for child in node.children:
            out.extend(self.node(resolved, child, path))
        return out

    def directives(self, node: QueryNode, path: tuple[str, ...]) -> Findings:
        # Only the first param is treated as a directive.
        if not node.params:
            return []
        name, value = next(iter(node.params.items()))
        if not name.startswith(DIRECTIVE_PREFIX):
            return []

        if name not in DIRECTIVES:
            return [ValidationError(f"Directive unknown '{name}'", path)]
        if not isinstance(value, ObjectValue) or not len(value):
            return [ValidationError(f"Missing arguments for directive '{name}'", path)]

        out = []
        for arg, arg_value in value.items():
            if arg != "if":
                out.append(ValidationError(f"Invalid argument '{arg}' for directive '{name}'", path))
            elif not isinstance(arg_value, BooleanValue):
                out.append(ValidationError("Invalid value for 'if`, must be a boolean", path))
        return out

    def params(self, field_def: Field, node: QueryNode, path: tuple[str, ...]) -> Findings:
        out = []
        for param, value in node.params.items():
            if param.startswith(DIRECTIVE_PREFIX):
                continue

            arg = field_def.arg(param)
            if arg is None:
                out.append(ValidationError(f"Invalid argument '{param}'", path))
                continue

            arg_type = self.schema.resolve(arg.type)
            if arg_type is None:
                out.append(ValidationError(f"Argument type not found for '{param}'", path))
                continue

            out.extend(self.value(arg_type, value, param, path))
        return out

    def value(self, arg_type: SchemaType, value: Value, for_arg: str, path: tuple[str, ...]) -> Findings:
        if not self.checks_type(arg_type):
            return []

        if isinstance(value, EnumValue):
            if arg_type.kind == "ENUM" and value.name in arg_type.enum_values:
                return []
            return [ValidationError(f"Invalid value for Enum '{arg_type.name}' for '{for_arg}'", path)]
        if isinstance(value, StringValue):
            if arg_type.name in STRING_SCALAR_TYPES:
                return []
            return [self.mismatch("String, Enum or ID", arg_type, for_arg, path)]
        if isinstance(value, BooleanValue):
            if arg_type.name == "Boolean":
                return []
            return [self.mismatch("Boolean", arg_type, for_arg, path)]
        if isinstance(value, IntValue):
            if arg_type.name == "Int":
                return []
            return [self.mismatch("Integer", arg_type, for_arg, path)]
        if isinstance(value, FloatValue):
            if arg_type.name == "Float":
                return []
            return [self.mismatch("Float", arg_type, for_arg, path)]
        if isinstance(value, ObjectValue):
            return self.input_object(arg_type, value, for_arg, path)
        if isinstance(value, ListValue):
            # Elements are checked against the element type; list-ness is not.
            out = []
            for item in value:
                out.extend(self.value(arg_type, item, for_arg, path))
            return out
        return [self.mismatch(kind_name(value), arg_type, for_arg, path)]

    def input_object(
        self, arg_type: SchemaType, value: ObjectValue, for_arg: str, path: tuple[str, ...]
    ) -> Findings:
        if arg_type.kind != "INPUT_OBJECT":
            return [self.mismatch("Object", arg_type, for_arg, path)]

        input_type = self.schema.type_named(arg_type.name)
        if input_type is None:
            return [ValidationError(f"Type not found for '{arg_type.name}'", path)]

        out = []
        for key, item in value.items():
            input_field = input_type.input_field(key)
            if input_field is None:
                out.append(ValidationError(f"Input field definition not found for '{key}'", path))
                continue

            field_type = self.schema.resolve(input_field.type)
            if field_type is None:
                out.append(ValidationError(f"Input field type not found for '{key}'", path))
                continue

            out.extend(self.value(field_type, item, key, path))
        return out

    def checks_type(self, arg_type: SchemaType) -> bool:
        """Known types are always checked; custom scalars only on request."""
        if arg_type.kind in KNOWN_KINDS or arg_type.name in KNOWN_TYPES:
            return True
        return self.schema.validate_unknown_types

    @staticmethod
    def mismatch(label: str, arg_type: SchemaType, for_arg: str, path: tuple[str, ...]) -> ValidationError:
        expected = "Enum" if arg_type.kind == "ENUM" else arg_type.name
        message = f"Value is '{label}', but should be '{expected}' for '{for_arg}'"
        if expected == "Enum":
            message += ". Wrap the value with `__enum`."
        return ValidationError(message, path)
