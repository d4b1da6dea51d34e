"""
Shared fixtures: an in-memory introspection document for a small cat API.
"""

import copy

import pytest

from gql_validator import Schema


def named(kind, name):
    return {"kind": kind, "name": name, "ofType": None}


def non_null(of_type):
    return {"kind": "NON_NULL", "name": None, "ofType": of_type}


def list_of(of_type):
    return {"kind": "LIST", "name": None, "ofType": of_type}


def field(name, type_ref, args=()):
    return {"name": name, "args": list(args), "type": type_ref}


def arg(name, type_ref):
    return {"name": name, "type": type_ref, "defaultValue": None}


def type_def(kind, name, fields=None, input_fields=None, enum_values=None, possible_types=None):
    return {
        "kind": kind,
        "name": name,
        "fields": fields,
        "inputFields": input_fields,
        "enumValues": [{"name": v} for v in enum_values] if enum_values is not None else None,
        "possibleTypes": [named("OBJECT", p) for p in possible_types] if possible_types is not None else None,
        "interfaces": [],
    }


STRING = named("SCALAR", "String")
INT = named("SCALAR", "Int")
FLOAT = named("SCALAR", "Float")
BOOLEAN = named("SCALAR", "Boolean")
ID = named("SCALAR", "ID")


def build_document():
    """Introspection result shaped like a Contentful cat space."""
    types = [
        type_def(
            "OBJECT",
            "Query",
            fields=[
                field(
                    "catCollection",
                    named("OBJECT", "CatCollection"),
                    args=[
                        arg("locale", STRING),
                        arg("limit", INT),
                        arg("where", named("INPUT_OBJECT", "CatFilter")),
                        arg("order", list_of(non_null(named("ENUM", "CatOrder")))),
                        arg("preview", BOOLEAN),
                        arg("seed", named("SCALAR", "JSON")),
                        arg("skipTo", named("SCALAR", "Phantom")),
                    ],
                ),
                field("cat", named("OBJECT", "Cat"), args=[arg("id", non_null(STRING))]),
                field("catIds", list_of(non_null(ID)), args=[arg("ids", list_of(INT))]),
                field("entry", named("INTERFACE", "Entry"), args=[arg("id", non_null(ID))]),
                field("ghost", named("OBJECT", "Ghost")),
                field("pet", named("UNION", "Pet"), args=[arg("id", ID), arg("meta", named("SCALAR", "Hash"))]),
                field("total", non_null(INT)),
            ],
        ),
        type_def(
            "OBJECT",
            "Mutation",
            fields=[
                field(
                    "updateCat",
                    named("OBJECT", "Cat"),
                    args=[arg("id", non_null(ID)), arg("input", non_null(named("INPUT_OBJECT", "CatFilter")))],
                ),
            ],
        ),
        type_def(
            "OBJECT",
            "CatCollection",
            fields=[
                field("total", non_null(INT)),
                field("items", non_null(list_of(named("OBJECT", "Cat")))),
            ],
        ),
        type_def(
            "OBJECT",
            "Cat",
            fields=[
                field("name", STRING, args=[arg("locale", STRING)]),
                field("color", STRING),
                field("birthday", named("SCALAR", "ISO8601DateTime")),
                field("lives", INT),
                field("weight", FLOAT),
                field("mood", named("ENUM", "Mood")),
                field("bestFriend", named("INTERFACE", "Entry")),
                field("image", named("OBJECT", "Asset")),
                field("likes", list_of(STRING)),
            ],
        ),
        type_def("OBJECT", "Human", fields=[field("name", STRING), field("image", named("OBJECT", "Asset"))]),
        type_def("OBJECT", "Asset", fields=[field("url", STRING, args=[arg("transform", named("INPUT_OBJECT", "ImageTransform"))])]),
        type_def("INTERFACE", "Entry", fields=[field("name", STRING)], possible_types=["Cat", "Human"]),
        type_def("UNION", "Pet", possible_types=["Cat", "Human"]),
        type_def(
            "INPUT_OBJECT",
            "CatFilter",
            input_fields=[
                arg("name", STRING),
                arg("lives", INT),
                arg("lives_gt", INT),
                arg("weight", FLOAT),
                arg("mood", named("ENUM", "Mood")),
                arg("color_in", list_of(STRING)),
                arg("OR", list_of(named("INPUT_OBJECT", "CatFilter"))),
                arg("tag", named("SCALAR", "Phantom")),
            ],
        ),
        type_def(
            "INPUT_OBJECT",
            "ImageTransform",
            input_fields=[arg("width", INT), arg("format", named("ENUM", "ImageFormat"))],
        ),
        type_def("ENUM", "Mood", enum_values=["HAPPY", "GRUMPY", "SLEEPY"]),
        type_def("ENUM", "CatOrder", enum_values=["name_ASC", "name_DESC"]),
        type_def("ENUM", "ImageFormat", enum_values=["JPG", "PNG"]),
        type_def("SCALAR", "String"),
        type_def("SCALAR", "Int"),
        type_def("SCALAR", "Float"),
        type_def("SCALAR", "Boolean"),
        type_def("SCALAR", "ID"),
        type_def("SCALAR", "ISO8601DateTime"),
        type_def("SCALAR", "JSON"),
        type_def("SCALAR", "Hash"),
    ]
    return {
        "__schema": {
            "queryType": {"name": "Query"},
            "mutationType": {"name": "Mutation"},
            "subscriptionType": None,
            "types": types,
            "directives": [],
        }
    }


@pytest.fixture
def introspection() -> dict:
    """Fresh copy of the introspection document."""
    return copy.deepcopy(build_document())


@pytest.fixture
def schema(introspection) -> Schema:
    """Schema that checks values of every argument type."""
    return Schema.from_introspection(introspection)


@pytest.fixture
def lenient_schema(introspection) -> Schema:
    """Schema that skips values of custom scalars."""
    return Schema.from_introspection(introspection, validate_unknown_types=False)
