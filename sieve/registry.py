"""Named schema registry with reference resolution.

The registry stores shared, immutable schemas behind a read/write lock.
Lookups and validation take the read side and never block each other;
registration takes the write side. Cloning a registry (or changing its
depth limit) yields a new handle over the same store, so schemas
registered through one handle are visible through all of them.

Usage:
    registry = SchemaRegistry()
    registry.register("UserId", Schema.string().uuid())
    registry.register("User", Schema.object().field("id", Schema.ref("UserId")))

    match registry.validate("User", payload):
        case Ok(Success(user)):
            ...
        case Ok(Failure(errors)):
            ...
        case Err(error):
            ...
"""
from __future__ import annotations

import sys
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from sieve.config import settings
from sieve.errors import Ok, RegistryError, Result, duplicate_name, schema_not_found
from sieve.interop.json_schema import export_schema, registry_to_json_schema
from sieve.logging import registry_logger
from sieve.path import JsonPath
from sieve.schema import SchemaLike
from sieve.validation import Validation, ValidationContext

log = registry_logger()

# Approximate frames one reference hop costs (object, optional, array,
# combinator, ref); deeper structural nesting between hops costs more.
_FRAMES_PER_HOP = 8
_FRAME_MARGIN = 200
_recursion_lock = threading.Lock()


def ensure_recursion_headroom(max_depth: int) -> None:
    """Raise the interpreter recursion limit so `max_depth` hops fit. Never lowers it."""
    needed = max_depth * _FRAMES_PER_HOP + _FRAME_MARGIN
    if sys.getrecursionlimit() >= needed:
        return
    with _recursion_lock:
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)
            log.debug("recursion_limit_raised", limit=needed, max_depth=max_depth)


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer.

    Waiting writers block new readers so registration cannot starve.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class _SchemaStore:
    """Name -> schema map shared by every registry handle."""

    __slots__ = ("schemas", "lock")

    def __init__(self) -> None:
        self.schemas: dict[str, SchemaLike] = {}
        self.lock = ReadWriteLock()


class SchemaRegistry:
    """Thread-safe store of named schemas."""

    def __init__(self, max_depth: int | None = None, *, _store: _SchemaStore | None = None) -> None:
        self._store = _store or _SchemaStore()
        self._max_depth = settings.MAX_DEPTH if max_depth is None else max_depth
        ensure_recursion_headroom(self._max_depth)

    @property
    def max_depth(self) -> int: return self._max_depth

    def with_max_depth(self, max_depth: int) -> SchemaRegistry:
        """Handle over the same schemas with a different reference-depth limit."""
        return SchemaRegistry(max_depth, _store=self._store)

    def clone(self) -> SchemaRegistry:
        return SchemaRegistry(self._max_depth, _store=self._store)

    __copy__ = clone

    def register(self, name: str, schema: SchemaLike) -> Result[None, RegistryError]:
        with self._store.lock.write():
            if name in self._store.schemas:
                log.warning("schema_registration_rejected", name=name)
                return duplicate_name(name)
            self._store.schemas[name] = schema
        log.debug("schema_registered", name=name)
        return Ok(None)

    def get(self, name: str) -> SchemaLike | None:
        with self._store.lock.read():
            return self._store.schemas.get(name)

    get_schema = get

    def names(self) -> list[str]:
        with self._store.lock.read():
            return sorted(self._store.schemas)

    def __contains__(self, name: object) -> bool:
        with self._store.lock.read():
            return name in self._store.schemas

    def __len__(self) -> int:
        with self._store.lock.read():
            return len(self._store.schemas)

    def validate(self, name: str, value: Any) -> Result[Validation[Any], RegistryError]:
        """Validate `value` against the schema registered as `name`.

        Err only when `name` is not registered; data problems come back as
        `Ok(Failure(...))`.
        """
        # The lock is released before validating; schemas are immutable.
        if (schema := self.get(name)) is None:
            log.warning("schema_not_found", name=name)
            return schema_not_found(name)
        context = ValidationContext(registry=self, depth=0, max_depth=self._max_depth)
        return Ok(schema.validate_to_value_with_context(value, JsonPath.root(), context))

    def validate_refs(self) -> list[str]:
        """Referenced names with no registered schema, sorted and deduplicated."""
        refs: list[str] = []
        with self._store.lock.read():
            for schema in self._store.schemas.values():
                schema.collect_refs(refs)
            unresolved = sorted({r for r in refs if r not in self._store.schemas})
        if unresolved:
            log.info("unresolved_references", count=len(unresolved), names=unresolved)
        return unresolved

    def to_json_schema(self) -> dict[str, Any]:
        """Every registered schema as `$defs` of one JSON Schema document."""
        return registry_to_json_schema(self)

    def export_schema(self, name: str) -> dict[str, Any] | None:
        return export_schema(self, name)

    def items(self) -> list[tuple[str, SchemaLike]]:
        with self._store.lock.read():
            return sorted(self._store.schemas.items(), key=lambda item: item[0])

    def __repr__(self) -> str:
        return f"SchemaRegistry(schemas={self.names()}, max_depth={self._max_depth})"
