"""Schema Builders

Every schema is an immutable value: builder methods return a modified copy,
so a base schema can be shared and extended safely.

Usage:
    from sieve.schema import Schema

    user = (
        Schema.object()
        .field("email", Schema.string().email())
        .field("age", Schema.integer().range(0, 150))
        .optional("tags", Schema.array(Schema.string()).unique())
    )
    result = user.validate({"email": "a@b.co", "age": 30})
"""
from __future__ import annotations

from typing import Iterable

from .base import SchemaLike
from .string import StringSchema, StringFormat, StringConstraint
from .numeric import IntegerSchema, IntegerConstraint
from .object import ObjectSchema, ValidatedObject, FieldDefinition, AdditionalProperties
from .array import ArraySchema, ArrayConstraint, find_duplicates
from .combinators import OneOfSchema, AnyOfSchema, AllOfSchema, OptionalSchema
from .ref import RefSchema
from .env import EnvSchema, EnvValidator


class Schema:
    """Entry points for building schemas."""

    @staticmethod
    def string() -> StringSchema: return StringSchema()

    @staticmethod
    def integer() -> IntegerSchema: return IntegerSchema()

    @staticmethod
    def object() -> ObjectSchema: return ObjectSchema()

    @staticmethod
    def array(item_schema: SchemaLike) -> ArraySchema: return ArraySchema(item_schema)

    @staticmethod
    def one_of(schemas: Iterable[SchemaLike]) -> OneOfSchema: return OneOfSchema(schemas)

    @staticmethod
    def any_of(schemas: Iterable[SchemaLike]) -> AnyOfSchema: return AnyOfSchema(schemas)

    @staticmethod
    def all_of(schemas: Iterable[SchemaLike]) -> AllOfSchema: return AllOfSchema(schemas)

    @staticmethod
    def optional(schema: SchemaLike) -> OptionalSchema: return OptionalSchema(schema)

    @staticmethod
    def ref(name: str) -> RefSchema: return RefSchema(name)


__all__ = [
    "Schema",
    "SchemaLike",
    "EnvSchema",
    "EnvValidator",
    # Leaf schemas
    "StringSchema",
    "StringFormat",
    "StringConstraint",
    "IntegerSchema",
    "IntegerConstraint",
    # Containers
    "ObjectSchema",
    "ValidatedObject",
    "FieldDefinition",
    "AdditionalProperties",
    "ArraySchema",
    "ArrayConstraint",
    "find_duplicates",
    # Combinators
    "OneOfSchema",
    "AnyOfSchema",
    "AllOfSchema",
    "OptionalSchema",
    # References
    "RefSchema",
]
