"""JSON Schema Export

Render schemas as JSON Schema draft 2020-12. Export is one-directional:
the generated documents describe schemas for other tools and are never
read back or consulted during validation.

Features:
- Every schema kind, including combinators and references
- Registry export with `$defs` and `#/$defs/{name}` references
- Transforms and custom validators have no JSON Schema form and are omitted
"""
from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

from sieve.schema.array import ArraySchema, MaxItems, MinItems, Unique
from sieve.schema.base import SchemaLike
from sieve.schema.combinators import AllOfSchema, AnyOfSchema, OneOfSchema, OptionalSchema
from sieve.schema.numeric import IntegerSchema, Max, Min, Negative, NonNegative, Positive
from sieve.schema.object import AdditionalProperties, ObjectSchema
from sieve.schema.ref import RefSchema
from sieve.schema.string import (
    Contains, EndsWith, Format, MaxLength, MinLength, OneOf, Pattern, StartsWith,
    StringFormat, StringSchema,
)

if TYPE_CHECKING:
    from sieve.registry import SchemaRegistry

DRAFT_2020_12 = "https://json-schema.org/draft/2020-12/schema"

FORMAT_MAP: dict[StringFormat, str] = {
    StringFormat.EMAIL: "email",
    StringFormat.URL: "uri",
    StringFormat.UUID: "uuid",
    StringFormat.DATE: "date",
    StringFormat.DATETIME: "date-time",
    StringFormat.IPV4: "ipv4",
    StringFormat.IPV6: "ipv6",
}


def _tighten(out: dict[str, Any], key: str, bound: int, pick: Callable[[int, int], int]) -> None:
    # Repeated bounds keep the strictest one.
    out[key] = pick(out[key], bound) if key in out else bound


def _all_of(out: dict[str, Any], fragment: dict[str, Any]) -> None:
    out.setdefault("allOf", []).append(fragment)


class SchemaGenerator(ABC):
    """Base class for schema exporters."""

    @abstractmethod
    def generate(self, schema: SchemaLike) -> dict[str, Any]:
        """Generate the exported representation of one schema."""

    def generate_all(self, schemas: dict[str, SchemaLike]) -> dict[str, dict[str, Any]]:
        return {name: self.generate(s) for name, s in schemas.items()}


class JSONSchemaGenerator(SchemaGenerator):
    """Generate JSON Schema (draft 2020-12) fragments."""

    def __init__(self, ref_prefix: str = "#/$defs/"): self.ref_prefix = ref_prefix

    def generate(self, schema: SchemaLike) -> dict[str, Any]:
        if isinstance(schema, StringSchema): return self._string(schema)
        if isinstance(schema, IntegerSchema): return self._integer(schema)
        if isinstance(schema, ObjectSchema): return self._object(schema)
        if isinstance(schema, ArraySchema): return self._array(schema)
        if isinstance(schema, OneOfSchema): return {"oneOf": [self.generate(s) for s in schema.schemas]}
        if isinstance(schema, AnyOfSchema): return {"anyOf": [self.generate(s) for s in schema.schemas]}
        if isinstance(schema, AllOfSchema): return {"allOf": [self.generate(s) for s in schema.schemas]}
        if isinstance(schema, OptionalSchema): return {"anyOf": [self.generate(schema.inner), {"type": "null"}]}
        if isinstance(schema, RefSchema): return {"$ref": f"{self.ref_prefix}{schema.name}"}
        # Unknown user-defined schema kinds accept anything.
        return {}

    def _string(self, schema: StringSchema) -> dict[str, Any]:
        out: dict[str, Any] = {"type": "string"}
        for c in schema.constraints:
            match c:
                case MinLength(min=n): _tighten(out, "minLength", n, max)
                case MaxLength(max=n): _tighten(out, "maxLength", n, min)
                case Pattern(pattern=p) if "pattern" in out: _all_of(out, {"pattern": p})
                case Pattern(pattern=p): out["pattern"] = p
                case Format(format=StringFormat.IP):
                    _all_of(out, {"anyOf": [{"format": "ipv4"}, {"format": "ipv6"}]})
                case Format(format=f): out["format"] = FORMAT_MAP[f]
                case OneOf(values=values): out["enum"] = list(values)
                case StartsWith(prefix=p): _all_of(out, {"pattern": f"^{re.escape(p)}"})
                case EndsWith(suffix=s): _all_of(out, {"pattern": f"{re.escape(s)}$"})
                case Contains(substring=s): _all_of(out, {"pattern": re.escape(s)})
        return out

    def _integer(self, schema: IntegerSchema) -> dict[str, Any]:
        out: dict[str, Any] = {"type": "integer"}
        for c in schema.constraints:
            match c:
                case Min(min=n): _tighten(out, "minimum", n, max)
                case Max(max=n): _tighten(out, "maximum", n, min)
                case Positive(): _tighten(out, "exclusiveMinimum", 0, max)
                case NonNegative(): _tighten(out, "minimum", 0, max)
                case Negative(): _tighten(out, "exclusiveMaximum", 0, min)
        return out

    def _object(self, schema: ObjectSchema) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        required: list[str] = []
        for name, definition in schema.fields.items():
            prop = self.generate(definition.schema)
            if definition.has_default:
                prop = {**prop, "default": definition.default}
            properties[name] = prop
            if definition.required:
                required.append(name)

        out: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            out["required"] = required
        if schema.additional is AdditionalProperties.DENY:
            out["additionalProperties"] = False
        elif isinstance(schema.additional, SchemaLike):
            out["additionalProperties"] = self.generate(schema.additional)
        return out

    def _array(self, schema: ArraySchema) -> dict[str, Any]:
        out: dict[str, Any] = {"type": "array", "items": self.generate(schema.item_schema)}
        for c in schema.constraints:
            match c:
                case MinItems(min=n): _tighten(out, "minItems", n, max)
                case MaxItems(max=n): _tighten(out, "maxItems", n, min)
                case Unique(key=None): out["uniqueItems"] = True
        return out


def to_json_schema(schema: SchemaLike) -> dict[str, Any]:
    """Standalone document for one schema."""
    return {"$schema": DRAFT_2020_12, **JSONSchemaGenerator().generate(schema)}


def registry_to_json_schema(registry: SchemaRegistry) -> dict[str, Any]:
    """All registered schemas under `$defs`, names sorted."""
    return {"$schema": DRAFT_2020_12, "$defs": JSONSchemaGenerator().generate_all(dict(registry.items()))}


def export_schema(registry: SchemaRegistry, name: str) -> dict[str, Any] | None:
    if (schema := registry.get(name)) is None:
        return None
    return to_json_schema(schema)


def to_json(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2)
