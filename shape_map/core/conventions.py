"""Field-matching conventions.

A convention inspects the full field lists of a source and a destination
Shape and yields candidate ``(source_field, destination_field)`` pairs.
Conventions are additive: a plan concatenates the output of every
registered convention before deduplicating.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence

from shape_map.core.shape import Field

Convention = Callable[[Sequence[Field], Sequence[Field]], Iterable[tuple[Field, Field]]]


def _join(
    sources: Sequence[Field],
    destinations: Sequence[Field],
    key: Callable[[str], str],
) -> Iterator[tuple[Field, Field]]:
    """Join readable sources to writable destinations on ``key(name)``, in destination order."""
    for destination in destinations:
        if not destination.writable:
            continue
        wanted = key(destination.name)
        for source in sources:
            if source.readable and key(source.name) == wanted:
                yield source, destination


def same_name_ignore_case(
    sources: Sequence[Field], destinations: Sequence[Field]
) -> Iterator[tuple[Field, Field]]:
    """Match fields whose names are equal case-insensitively."""
    return _join(sources, destinations, str.casefold)


def same_name_ignore_separators(
    sources: Sequence[Field], destinations: Sequence[Field]
) -> Iterator[tuple[Field, Field]]:
    """Match ``first_name`` to ``FirstName``: case and underscores are ignored."""
    return _join(sources, destinations, lambda name: name.replace("_", "").casefold())
