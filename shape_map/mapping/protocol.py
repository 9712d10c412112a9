"""Mapper protocol.

Mappers bound to a destination type implement this interface: map_one
for single instances and map_many for sequences.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", covariant=True)


@runtime_checkable
class Mapper(Protocol[T]):
    """Base mapper protocol."""

    def map_one(self, source: Any) -> T | None:
        """Map a single source instance; None maps to None."""
        ...

    def map_many(self, sources: Iterable[Any] | None) -> list[T | None]:
        """Map a sequence of source instances."""
        ...
