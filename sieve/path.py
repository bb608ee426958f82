"""Locations inside a JSON value.

A path is an immutable sequence of segments: `str` segments are object
fields, `int` segments are array indices. Paths only label where an error
happened; they are never used to look values up.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Iterator, Union

PathSegment = Union[str, int]


@total_ordering
@dataclass(frozen=True, slots=True)
class JsonPath:
    """Immutable, append-only location such as `users[0].email`."""
    segments: tuple[PathSegment, ...] = ()

    @classmethod
    def root(cls) -> JsonPath:
        return _ROOT

    @classmethod
    def from_field(cls, name: str) -> JsonPath:
        return cls((name,))

    @classmethod
    def from_index(cls, index: int) -> JsonPath:
        return cls((index,))

    def push_field(self, name: str) -> JsonPath:
        return JsonPath((*self.segments, name))

    def push_index(self, index: int) -> JsonPath:
        return JsonPath((*self.segments, index))

    def parent(self) -> JsonPath | None:
        """Path without its last segment, or None at the root."""
        return JsonPath(self.segments[:-1]) if self.segments else None

    def last(self) -> PathSegment | None:
        return self.segments[-1] if self.segments else None

    def is_root(self) -> bool:
        return not self.segments

    def len(self) -> int:
        return len(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def _sort_key(self) -> tuple:
        # Fields sort before indices at the same position.
        return tuple((1, s, "") if isinstance(s, int) else (0, 0, s) for s in self.segments)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, JsonPath):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif parts:
                parts.append(f".{segment}")
            else:
                parts.append(segment)
        return "".join(parts)

    def __repr__(self) -> str:
        return f"JsonPath({str(self)!r})"


_ROOT = JsonPath()
