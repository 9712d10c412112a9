"""Mapping plans.

A plan is the compiled, ordered list of field-to-field assignments for one
``(source_type, destination_type)`` pair. It is compiled once, then reused
for every instance pair it maps.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from shape_map.core.conventions import Convention
from shape_map.core.conversion import Conversion, ConversionRegistry
from shape_map.core.exceptions import (
    FieldAccessError,
    MappingError,
    MissingConversionError,
    NoConventionsError,
)
from shape_map.core.shape import Field

if TYPE_CHECKING:
    from shape_map.core.configuration import MapperConfiguration

logger = logging.getLogger(__name__)


def same_type(source_type: Any, destination_type: Any) -> bool:
    """Whether two declared types can be assigned without a conversion.

    Types are compared by identity (``==``), never by name. ``Any`` on
    either side matches anything.

    ``str`` and ``str | None`` are different types, so a required source
    field mapped onto an optional destination field needs a conversion.
    Register an identity one for the pair::

        configuration.add_conversion(str, str | None, lambda value: value)
    """
    if source_type is Any or destination_type is Any:
        return True
    return bool(source_type == destination_type)


@dataclass(frozen=True)
class FieldLookup:
    """One source-to-destination field assignment.

    Equality ignores the conversion, so the same pair produced by two
    conventions collapses to a single lookup.
    """

    source: Field
    destination: Field
    conversion: Conversion | None = field(default=None, compare=False)


class ConventionPlan:
    """Plan built purely from conventions and conversions.

    Args:
        configuration: Owning configuration; supplies shapes, conventions
            and conversions at compile time.
        source_type: The type mapped from.
        destination_type: The type mapped to.
    """

    def __init__(
        self,
        configuration: MapperConfiguration,
        source_type: type,
        destination_type: type,
    ) -> None:
        self._configuration = configuration
        self.source_type = source_type
        self.destination_type = destination_type
        self.conventions: list[Convention] = []
        self.conversions = ConversionRegistry()
        self.ignored_type_names: set[str] = set()
        self.ignored_field_names: set[str] = set()
        self.activator: Callable[[Any], Any] | None = None
        self._lookups: tuple[FieldLookup, ...] | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.source_type.__name__} -> "
            f"{self.destination_type.__name__})"
        )

    @property
    def initialized(self) -> bool:
        return self._lookups is not None

    @property
    def lookups(self) -> tuple[FieldLookup, ...]:
        """Compiled lookups; compiles on first access."""
        if self._lookups is None:
            self.initialize()
        return self._lookups  # type: ignore[return-value]

    def initialize(self) -> None:
        """Compile the field lookups. Runs once; later calls are no-ops."""
        if self._lookups is not None:
            return
        with self._lock:
            if self._lookups is None:
                self._lookups = self._compile()
                logger.debug("Compiled %r with %d field lookups", self, len(self._lookups))

    def _compile(self) -> tuple[FieldLookup, ...]:
        conventions = [*self._configuration.conventions, *self.conventions]
        if not conventions:
            raise NoConventionsError(self.source_type, self.destination_type)

        shapes = self._configuration.shapes
        source_fields = shapes.describe(self.source_type).fields
        destination_fields = shapes.describe(self.destination_type).fields

        candidates: list[tuple[Field, Field]] = []
        for convention in conventions:
            candidates.extend(convention(source_fields, destination_fields))

        lookups: list[FieldLookup] = []
        seen: set[FieldLookup] = set()
        for source, destination in candidates:
            if not source.readable:
                raise FieldAccessError(source.name, source.owner or self.source_type, "readable")
            if not destination.writable:
                raise FieldAccessError(
                    destination.name, destination.owner or self.destination_type, "writable"
                )

            lookup = FieldLookup(source, destination, self._find_conversion(source, destination))
            if lookup in seen:
                continue
            seen.add(lookup)
            lookups.append(lookup)

        return tuple(
            lookup
            for lookup in lookups
            if lookup.destination.type_name not in self.ignored_type_names
            and lookup.destination.name not in self.ignored_field_names
        )

    def _find_conversion(self, source: Field, destination: Field) -> Conversion | None:
        if same_type(source.type, destination.type):
            return None
        conversion = self.conversions.get(source.type, destination.type)
        if conversion is None:
            conversion = self._configuration.conversions.get(source.type, destination.type)
        if conversion is None:
            raise MissingConversionError(source.type, destination.type, destination.name)
        return conversion

    def map(self, source: Any, destination: Any) -> None:
        """Copy every looked-up field from ``source`` onto ``destination``.

        Not atomic: fields written before a failure stay written.

        Raises:
            MappingError: If a read, conversion or write fails.
        """
        for lookup in self.lookups:
            try:
                value = lookup.source.get(source)
                if lookup.conversion is not None:
                    value = lookup.conversion.convert(value)
                lookup.destination.set(destination, value)
            except Exception as e:
                raise MappingError(
                    self.source_type,
                    self.destination_type,
                    f"There was an error setting mapped field '{lookup.destination.name}'",
                    field_name=lookup.destination.name,
                ) from e

    def create_destination(self, source: Any) -> Any:
        """Build the destination with the custom activator, or return None."""
        if self.activator is None:
            return None
        return self.activator(source)


class ManualPlan(ConventionPlan):
    """Plan with a user transform layered over convention mapping.

    The transform runs after convention mapping and may overwrite any
    field it set. With ``use_conventions`` off only the transform runs.
    """

    def __init__(
        self,
        configuration: MapperConfiguration,
        source_type: type,
        destination_type: type,
        transform: Callable[[Any, Any], None] | None = None,
        use_conventions: bool = True,
    ) -> None:
        super().__init__(configuration, source_type, destination_type)
        self.transform = transform
        self.use_conventions = use_conventions

    def _compile(self) -> tuple[FieldLookup, ...]:
        if not self.use_conventions:
            return ()
        return super()._compile()

    def map(self, source: Any, destination: Any) -> None:
        if self.use_conventions:
            super().map(source, destination)

        if self.transform is None:
            return
        try:
            self.transform(source, destination)
        except Exception as e:
            raise MappingError(
                self.source_type,
                self.destination_type,
                "There was an error applying the manual map",
            ) from e
