"""GraphQL parsing into query trees."""

from decimal import Decimal

from graphql import (
    BooleanValueNode,
    DocumentNode,
    EnumValueNode,
    FieldNode,
    FloatValueNode,
    GraphQLError,
    InlineFragmentNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    OperationDefinitionNode,
    StringValueNode,
    ValueNode,
    parse,
)

from .query import DIRECTIVE_PREFIX, FRAGMENT_PREFIX, Operation, QueryNode
from .values import (
    BooleanValue,
    EnumValue,
    FloatValue,
    IntValue,
    ListValue,
    NullValue,
    ObjectValue,
    StringValue,
    Value,
)


class QueryParseError(ValueError):
    """Query text is malformed or uses constructs the validator cannot check."""


def parse_query(source: str) -> DocumentNode:
    """
    Parse GraphQL query string into AST.

    Args:
        source: GraphQL query string

    Returns:
        DocumentNode AST

    Raises:
        QueryParseError: If query is syntactically invalid
    """
    try:
        return parse(source)
    except GraphQLError as e:
        raise QueryParseError(f"Syntax error: {e.message}") from e


def parse_operations(source: str) -> list[Operation]:
    """
    Parse GraphQL text into one Operation per operation definition.

    Directives are placed before arguments in each node's params.

    Raises:
        QueryParseError: On syntax errors, variables or named fragment spreads
    """
    doc = parse_query(source)
    operations = []
    for definition in doc.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            raise QueryParseError("Fragment definitions are not supported, use inline fragments")
        operations.append(
            Operation(
                kind=definition.operation.value,
                name=definition.name.value if definition.name else None,
                nodes=selections(definition.selection_set),
            )
        )
    if not operations:
        raise QueryParseError("Document contains no operation")
    return operations


def selections(selection_set) -> tuple[QueryNode, ...]:
    """Convert a selection set into query nodes."""
    if selection_set is None:
        return ()
    return tuple(to_node(s) for s in selection_set.selections)


def to_node(selection) -> QueryNode:
    """Convert a field or inline fragment AST node into a QueryNode."""
    params = {}
    for directive in selection.directives or ():
        key = f"{DIRECTIVE_PREFIX}{directive.name.value}"
        if key in params:
            raise QueryParseError(f"Directive '{key}' is repeated on one selection")
        params[key] = ObjectValue(
            tuple((arg.name.value, to_value(arg.value)) for arg in directive.arguments or ())
        )

    if isinstance(selection, InlineFragmentNode):
        if selection.type_condition is None:
            raise QueryParseError("Inline fragments need a type condition")
        return QueryNode(
            name=f"{FRAGMENT_PREFIX}{selection.type_condition.name.value}",
            params=params,
            children=selections(selection.selection_set),
        )

    if not isinstance(selection, FieldNode):
        raise QueryParseError("Named fragment spreads are not supported, use inline fragments")

    name = selection.name.value
    if selection.alias:
        name = f"{selection.alias.value}: {name}"

    for arg in selection.arguments or ():
        params[arg.name.value] = to_value(arg.value)

    return QueryNode(name=name, params=params, children=selections(selection.selection_set))


def to_value(node: ValueNode) -> Value:
    """Convert a literal AST value into a Value."""
    if isinstance(node, IntValueNode):
        return IntValue(int(node.value))
    if isinstance(node, FloatValueNode):
        return FloatValue(Decimal(node.value))
    if isinstance(node, StringValueNode):
        return StringValue(node.value)
    if isinstance(node, BooleanValueNode):
        return BooleanValue(node.value)
    if isinstance(node, NullValueNode):
        return NullValue()
    if isinstance(node, EnumValueNode):
        return EnumValue(node.value)
    if isinstance(node, ListValueNode):
        return ListValue(tuple(to_value(v) for v in node.values))
    if isinstance(node, ObjectValueNode):
        return ObjectValue(tuple((f.name.value, to_value(f.value)) for f in node.fields))
    raise QueryParseError(f"Unsupported value '{node.__class__.__name__}', variables must be inlined")
