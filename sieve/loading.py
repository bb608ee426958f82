"""Load schema documents from a directory into a registry.

Each `*.json`, `*.yaml` or `*.yml` file holds one schema document and is
registered under its file stem. Problems are collected per file: one bad
document never stops the others from loading.

Document shape (a small JSON-Schema-like subset):
    type: object
    properties:
      email: {type: string, format: email}
      age: {type: integer, minimum: 0}
    required: [email]
    additionalProperties: false
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from sieve.errors import (
    Err, LoadError, Ok, Result, SchemaDefinitionError, collect_results,
    document_error, invalid_file_name, io_error, parse_error, registration_failed,
)
from sieve.logging import loader_logger
from sieve.registry import SchemaRegistry
from sieve.schema import Schema, SchemaLike, StringFormat

log = loader_logger()

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")

_FORMATS: dict[str, StringFormat] = {
    "email": StringFormat.EMAIL,
    "uri": StringFormat.URL,
    "url": StringFormat.URL,
    "uuid": StringFormat.UUID,
    "date": StringFormat.DATE,
    "date-time": StringFormat.DATETIME,
    "ip": StringFormat.IP,
    "ipv4": StringFormat.IPV4,
    "ipv6": StringFormat.IPV6,
}


class SchemaDocument(BaseModel):
    """Parsed schema document; unknown keywords are ignored."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    type: Literal["string", "integer", "object", "array"]
    # string
    min_length: int | None = Field(None, alias="minLength", ge=0)
    max_length: int | None = Field(None, alias="maxLength", ge=0)
    pattern: str | None = None
    format: str | None = None
    enum: list[str] | None = None
    # integer
    minimum: int | None = None
    maximum: int | None = None
    # object
    properties: dict[str, SchemaDocument] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    additional_properties: bool = Field(True, alias="additionalProperties")
    # array
    items: SchemaDocument | None = None
    min_items: int | None = Field(None, alias="minItems", ge=0)
    max_items: int | None = Field(None, alias="maxItems", ge=0)
    unique_items: bool = Field(False, alias="uniqueItems")

    @model_validator(mode="after")
    def _check_keywords(self) -> SchemaDocument:
        if self.format is not None and self.format not in _FORMATS:
            raise ValueError(f"unsupported format '{self.format}'")
        if missing := [name for name in self.required if name not in self.properties]:
            raise ValueError(f"required names not declared in properties: {', '.join(missing)}")
        return self


SchemaDocument.model_rebuild()


def build_schema(doc: SchemaDocument) -> SchemaLike:
    """Turn a document into a schema.

    Raises:
        SchemaDefinitionError: if a keyword value cannot form a schema (bad regex)
    """
    match doc.type:
        case "string":
            schema = Schema.string()
            if doc.min_length is not None: schema = schema.min_len(doc.min_length)
            if doc.max_length is not None: schema = schema.max_len(doc.max_length)
            if doc.pattern is not None: schema = schema.pattern(doc.pattern)
            if doc.format is not None: schema = schema.format(_FORMATS[doc.format])
            if doc.enum is not None: schema = schema.one_of(doc.enum)
            return schema
        case "integer":
            schema = Schema.integer()
            if doc.minimum is not None: schema = schema.min(doc.minimum)
            if doc.maximum is not None: schema = schema.max(doc.maximum)
            return schema
        case "object":
            schema = Schema.object()
            for name, prop in doc.properties.items():
                child = build_schema(prop)
                schema = schema.field(name, child) if name in doc.required else schema.optional(name, child)
            return schema if doc.additional_properties else schema.additional_properties(False)
        case "array":
            schema = Schema.array(build_schema(doc.items) if doc.items else Schema.object())
            if doc.min_items is not None: schema = schema.min_len(doc.min_items)
            if doc.max_items is not None: schema = schema.max_len(doc.max_items)
            if doc.unique_items: schema = schema.unique()
            return schema
    raise SchemaDefinitionError(f"unsupported type '{doc.type}'")


def _parse(path: Path, text: str) -> Any:
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


class SchemaLoader:
    """Registers every schema document found in a directory."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def load_file(self, path: Path | str) -> Result[str, LoadError]:
        """Load one document and register it under the file stem."""
        path = Path(path)
        if not (name := path.stem.strip()):
            return self._failed(invalid_file_name(path))

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            return self._failed(io_error(path, e))
        except UnicodeDecodeError as e:
            return self._failed(parse_error(path, f"not valid UTF-8 ({e.reason})"))

        try:
            raw = _parse(path, text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            return self._failed(parse_error(path, str(e)))

        try:
            schema = build_schema(SchemaDocument.model_validate(raw))
        except ValidationError as e:
            return self._failed(document_error(path, "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '(root)'}: {err['msg']}" for err in e.errors())))
        except SchemaDefinitionError as e:
            return self._failed(document_error(path, str(e)))

        match self.registry.register(name, schema):
            case Err(error):
                return self._failed(registration_failed(path, error))

        log.debug("schema_loaded", name=name, file=str(path))
        return Ok(name)

    def load_dir(self, directory: Path | str) -> Result[list[str], list[LoadError]]:
        """Load every supported file directly inside `directory`, in name order."""
        directory = Path(directory)
        try:
            files = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES)
        except OSError as e:
            return Err([self._failed(io_error(directory, e)).error])

        outcome = collect_results([self.load_file(p) for p in files])
        log.info("schema_dir_loaded", directory=str(directory),
            count=len(outcome.value) if outcome.is_ok() else len(files) - len(outcome.error),
            errors=0 if outcome.is_ok() else len(outcome.error))
        return outcome

    def _failed(self, error: LoadError) -> Err[LoadError]:
        log.warning("schema_load_failed", file=str(error.path), kind=error.kind.value)
        return Err(error)


def load_dir(registry: SchemaRegistry, directory: Path | str) -> Result[list[str], list[LoadError]]:
    return SchemaLoader(registry).load_dir(directory)
