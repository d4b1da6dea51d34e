"""Query tree model."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from .values import Value, to_value

FRAGMENT_PREFIX = "... on "
DIRECTIVE_PREFIX = "@"
OPERATION_KINDS = ("query", "mutation", "subscription")


@dataclass(frozen=True)
class QueryNode:
    """
    A single selection in a query tree.

    `name` is the raw selection name: a field name, "alias: field", or an
    inline fragment marker "... on TypeName". `params` maps argument names,
    and directive names prefixed with "@", to values in declaration order;
    plain Python values are converted with `to_value`.
    """

    name: str
    params: Mapping[str, Value] = field(default_factory=dict, hash=False)
    children: tuple["QueryNode", ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self, "params", MappingProxyType({str(k): to_value(v) for k, v in self.params.items()})
        )
        object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def build(
        cls,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        children: Sequence["QueryNode"] = (),
    ) -> "QueryNode":
        """Create a node from keyword-friendly arguments."""
        return cls(name=name, params=params or {}, children=tuple(children))

    @property
    def is_fragment(self) -> bool:
        return self.name.startswith(FRAGMENT_PREFIX)

    @property
    def fragment_type(self) -> Optional[str]:
        """Type named by an inline fragment marker, None for fields."""
        if not self.is_fragment:
            return None
        return self.name[len(FRAGMENT_PREFIX):]

    @property
    def field_name(self) -> str:
        """Field name with any "alias:" prefix removed."""
        if ":" not in self.name:
            return self.name
        return self.name.split(":", 1)[1].strip()

    @property
    def alias(self) -> Optional[str]:
        if self.is_fragment or ":" not in self.name:
            return None
        return self.name.split(":", 1)[0].strip()


@dataclass(frozen=True)
class Operation:
    """Root of a query tree: an operation kind and its top-level selections."""

    kind: str
    nodes: tuple[QueryNode, ...] = ()
    name: Optional[str] = None

    def __post_init__(self):
        if self.kind not in OPERATION_KINDS:
            raise ValueError(f"Unknown operation kind '{self.kind}'")
        object.__setattr__(self, "nodes", tuple(self.nodes))

    @property
    def root(self) -> QueryNode:
        """The operation as a node whose children are the top-level selections."""
        return QueryNode(name=self.kind, children=self.nodes)

    @property
    def children(self) -> tuple[QueryNode, ...]:
        return self.nodes


def query(*nodes: QueryNode, name: Optional[str] = None) -> Operation:
    """Shorthand for a query operation."""
    return Operation(kind="query", nodes=nodes, name=name)


def mutation(*nodes: QueryNode, name: Optional[str] = None) -> Operation:
    """Shorthand for a mutation operation."""
    return Operation(kind="mutation", nodes=nodes, name=name)


def subscription(*nodes: QueryNode, name: Optional[str] = None) -> Operation:
    """Shorthand for a subscription operation."""
    return Operation(kind="subscription", nodes=nodes, name=name)
