"""Typed schema model built from an introspection document."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

NAMED_KINDS = frozenset({"SCALAR", "OBJECT", "INTERFACE", "UNION", "ENUM", "INPUT_OBJECT"})
WRAPPER_KINDS = frozenset({"LIST", "NON_NULL"})
ENTRY_POINTS = {
    "query": "query_type",
    "mutation": "mutation_type",
    "subscription": "subscription_type",
}


class SchemaFormatError(ValueError):
    """Raised when an introspection document cannot be turned into a Schema."""


@dataclass(frozen=True)
class TypeRef:
    """Possibly wrapped reference to a named type."""

    kind: str
    name: Optional[str] = None
    of_type: Optional["TypeRef"] = None

    @property
    def is_wrapper(self) -> bool:
        return self.kind in WRAPPER_KINDS

    def unwrap(self) -> "TypeRef":
        """Strip NON_NULL and LIST wrappers down to the named type."""
        ref = self
        while ref.is_wrapper:
            ref = ref.of_type
        return ref


@dataclass(frozen=True)
class Field:
    """Field, argument or input field definition."""

    name: str
    type: TypeRef
    args: tuple["Field", ...] = ()

    def arg(self, name: str) -> Optional["Field"]:
        return next((a for a in self.args if a.name == name), None)


@dataclass(frozen=True)
class SchemaType:
    """Named type definition."""

    name: str
    kind: str
    fields: tuple[Field, ...] = ()
    input_fields: tuple[Field, ...] = ()
    enum_values: tuple[str, ...] = ()
    possible_types: frozenset = frozenset()

    def field(self, name: str) -> Optional[Field]:
        return next((f for f in self.fields if f.name == name), None)

    def input_field(self, name: str) -> Optional[Field]:
        return next((f for f in self.input_fields if f.name == name), None)


@dataclass(frozen=True)
class Schema:
    """
    Read-only schema: named types plus the root operation type names.

    Build it once with `Schema.from_introspection` and share it freely;
    nothing mutates it afterwards.
    """

    types: tuple[SchemaType, ...]
    query_type: Optional[str] = None
    mutation_type: Optional[str] = None
    subscription_type: Optional[str] = None
    validate_unknown_types: bool = True

    @classmethod
    def from_introspection(cls, document: dict, validate_unknown_types: bool = True) -> "Schema":
        """
        Build a Schema from an introspection result.

        Args:
            document: Either {"__schema": {...}} or {"data": {"__schema": {...}}}
            validate_unknown_types: Whether values for custom scalars are type-checked

        Returns:
            Schema instance

        Raises:
            SchemaFormatError: If the document is malformed
        """
        if not isinstance(document, dict):
            raise SchemaFormatError("Introspection document must be a mapping")

        # Handle both formats
        data = document.get("data") if "__schema" not in document else document
        if not isinstance(data, dict) or not isinstance(data.get("__schema"), dict):
            raise SchemaFormatError("Introspection document has no '__schema' entry")
        raw = data["__schema"]

        raw_types = raw.get("types")
        if not isinstance(raw_types, list):
            raise SchemaFormatError("Introspection '__schema' has no 'types' list")

        types = tuple(_parse_type(t) for t in raw_types)
        seen = set()
        for t in types:
            if t.name in seen:
                raise SchemaFormatError(f"Duplicate type definition '{t.name}'")
            seen.add(t.name)

        schema = cls(
            types=types,
            query_type=_root_name(raw, "queryType"),
            mutation_type=_root_name(raw, "mutationType"),
            subscription_type=_root_name(raw, "subscriptionType"),
            validate_unknown_types=validate_unknown_types,
        )
        logger.debug(
            "Built schema with %d types (query=%s, mutation=%s, subscription=%s)",
            len(types),
            schema.query_type,
            schema.mutation_type,
            schema.subscription_type,
        )
        return schema

    @property
    def type_names(self) -> list[str]:
        return [t.name for t in self.types]

    def type_named(self, name: Optional[str], ignore_case: bool = False) -> Optional[SchemaType]:
        """Look up a type by name; case-insensitive lookup is for root types."""
        if name is None:
            return None
        if ignore_case:
            folded = name.casefold()
            return next((t for t in self.types if t.name.casefold() == folded), None)
        return next((t for t in self.types if t.name == name), None)

    def entry_type_name(self, operation_kind: str) -> Optional[str]:
        """Configured root type name for query, mutation or subscription."""
        try:
            attr = ENTRY_POINTS[operation_kind]
        except KeyError:
            raise ValueError(f"Unknown operation kind '{operation_kind}'") from None
        return getattr(self, attr)

    def resolve(self, ref: TypeRef) -> Optional[SchemaType]:
        """Unwrap a type reference and find its named type definition."""
        return self.type_named(ref.unwrap().name)


def _root_name(raw: dict, key: str) -> Optional[str]:
    entry = raw.get(key)
    if entry is None:
        return None
    if not isinstance(entry, dict) or not entry.get("name"):
        raise SchemaFormatError(f"Invalid root type entry '{key}'")
    return entry["name"]


def _parse_type_ref(raw: Any) -> TypeRef:
    if not isinstance(raw, dict) or "kind" not in raw:
        raise SchemaFormatError(f"Invalid type reference: {raw!r}")

    kind = raw["kind"]
    if kind in WRAPPER_KINDS:
        if raw.get("ofType") is None:
            raise SchemaFormatError(f"{kind} type reference without 'ofType'")
        return TypeRef(kind=kind, of_type=_parse_type_ref(raw["ofType"]))

    if kind not in NAMED_KINDS:
        raise SchemaFormatError(f"Unknown type kind '{kind}'")
    if not raw.get("name"):
        raise SchemaFormatError(f"{kind} type reference without a name")
    return TypeRef(kind=kind, name=raw["name"])


def _parse_field(raw: Any) -> Field:
    if not isinstance(raw, dict) or not raw.get("name"):
        raise SchemaFormatError(f"Invalid field definition: {raw!r}")
    if "type" not in raw:
        raise SchemaFormatError(f"Field '{raw['name']}' has no type")
    return Field(
        name=raw["name"],
        type=_parse_type_ref(raw["type"]),
        args=tuple(_parse_field(a) for a in raw.get("args") or []),
    )


def _parse_type(raw: Any) -> SchemaType:
    if not isinstance(raw, dict) or not raw.get("name"):
        raise SchemaFormatError(f"Invalid type definition: {raw!r}")
    kind = raw.get("kind")
    if kind not in NAMED_KINDS:
        raise SchemaFormatError(f"Type '{raw['name']}' has invalid kind {kind!r}")

    try:
        enum_values = tuple(v["name"] for v in raw.get("enumValues") or [])
        possible_types = frozenset(p["name"] for p in raw.get("possibleTypes") or [])
    except (KeyError, TypeError) as e:
        raise SchemaFormatError(f"Type '{raw['name']}' has a malformed entry: {e}") from e

    return SchemaType(
        name=raw["name"],
        kind=kind,
        fields=tuple(_parse_field(f) for f in raw.get("fields") or []),
        input_fields=tuple(_parse_field(f) for f in raw.get("inputFields") or []),
        enum_values=enum_values,
        possible_types=possible_types,
    )
