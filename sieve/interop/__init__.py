"""Export adapters. Nothing here is consulted during validation."""
from .json_schema import (
    DRAFT_2020_12,
    SchemaGenerator,
    JSONSchemaGenerator,
    to_json_schema,
    registry_to_json_schema,
    export_schema,
    to_json,
)

__all__ = [
    "DRAFT_2020_12",
    "SchemaGenerator",
    "JSONSchemaGenerator",
    "to_json_schema",
    "registry_to_json_schema",
    "export_schema",
    "to_json",
]
