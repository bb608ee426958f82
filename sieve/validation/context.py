"""Per-call traversal state threaded through context-aware validation."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sieve.schema.base import SchemaLike

DEFAULT_MAX_DEPTH = 100


@runtime_checkable
class RegistryAccess(Protocol):
    """What a reference needs from a registry: name lookup."""

    def get_schema(self, name: str) -> SchemaLike | None: ...


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Registry handle plus reference-hop depth.

    Depth grows only when a reference is followed, never on descent into
    object fields or array items.
    """
    registry: RegistryAccess
    depth: int = 0
    max_depth: int = DEFAULT_MAX_DEPTH

    def increment_depth(self) -> ValidationContext:
        return replace(self, depth=self.depth + 1)

    def is_depth_exceeded(self) -> bool:
        return self.depth >= self.max_depth
