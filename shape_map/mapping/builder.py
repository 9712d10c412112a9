"""Mapping configuration DSL.

Provides the fluent builder mapper definitions use to declare maps,
conventions, conversions, ignore lists and activators.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from shape_map.core.conventions import Convention
from shape_map.core.exceptions import ConfigurationError, UnknownFieldError
from shape_map.mapping.plan import ManualPlan

if TYPE_CHECKING:
    from shape_map.core.configuration import MapperConfiguration


class MappingBuilder:
    """Entry point handed to ``MapperDefinition.setup``."""

    def __init__(self, configuration: MapperConfiguration) -> None:
        self._configuration = configuration

    def map(self, source_type: type, destination_type: type) -> MapBuilder:
        """Declare a map between two types, using conventions by default."""
        plan = self._configuration.add_map(source_type, destination_type)
        return MapBuilder(plan, self._configuration)

    def use_convention(self, convention: Convention) -> MappingBuilder:
        """Add a convention for every plan compiled from now on."""
        self._configuration.add_convention(convention)
        return self

    def convert(
        self,
        source_type: Any,
        destination_type: Any,
        conversion: Callable[[Any], Any],
    ) -> MappingBuilder:
        """Register a configuration-wide conversion."""
        self._configuration.add_conversion(source_type, destination_type, conversion)
        return self


class MapBuilder:
    """Fluent builder for one declared map."""

    def __init__(self, plan: ManualPlan, configuration: MapperConfiguration) -> None:
        self._plan = plan
        self._configuration = configuration

    @property
    def plan(self) -> ManualPlan:
        return self._plan

    def include_from(self, source_type: type) -> MapBuilder:
        """Share this plan with a subtype of the source type."""
        if not issubclass(source_type, self._plan.source_type):
            raise ConfigurationError(
                f"{source_type.__name__} must be a subclass of "
                f"{self._plan.source_type.__name__} in order to share a map"
            )
        self._configuration.add_plan(source_type, self._plan.destination_type, self._plan)
        return self

    def include_to(self, destination_type: type) -> MapBuilder:
        """Share this plan with a subtype of the destination type."""
        if not issubclass(destination_type, self._plan.destination_type):
            raise ConfigurationError(
                f"{destination_type.__name__} must be a subclass of "
                f"{self._plan.destination_type.__name__} in order to share a map"
            )
        self._configuration.add_plan(self._plan.source_type, destination_type, self._plan)
        return self

    def add_convention(self, convention: Convention) -> MapBuilder:
        """Add a convention used only by this map."""
        self._plan.conventions.append(convention)
        return self

    def add_conversion(
        self,
        source_type: Any,
        destination_type: Any,
        conversion: Callable[[Any], Any],
    ) -> MapBuilder:
        """Add a conversion used only by this map; wins over configuration-wide ones."""
        self._plan.conversions.register(source_type, destination_type, conversion)
        return self

    def set_manually(self, transform: Callable[[Any, Any], None]) -> MapBuilder:
        """Run ``transform(source, destination)`` after convention mapping."""
        self._plan.transform = transform
        return self

    def ignore_conventions(self) -> MapBuilder:
        """Only run the manual transform for this map."""
        self._plan.use_conventions = False
        return self

    def create_with(self, activator: Callable[[Any], Any]) -> MapBuilder:
        """Build destinations with ``activator(source)`` instead of the default."""
        self._plan.activator = activator
        return self

    def ignore(self, *field_names: str) -> MapBuilder:
        """Exclude destination fields by name."""
        self._check_fields(field_names)
        self._plan.ignored_field_names.update(field_names)
        return self

    def keep(self, *field_names: str) -> MapBuilder:
        """Exclude every destination field except the named ones."""
        self._check_fields(field_names)
        names = self._configuration.shapes.describe(self._plan.destination_type).names
        self._plan.ignored_field_names.update(n for n in names if n not in field_names)
        return self

    def ignore_types(self, *type_names: str) -> MapBuilder:
        """Exclude every destination field whose declared type has one of these names."""
        self._plan.ignored_type_names.update(type_names)
        return self

    def _check_fields(self, field_names: tuple[str, ...]) -> None:
        shape = self._configuration.shapes.describe(self._plan.destination_type)
        for name in field_names:
            if shape.field(name) is None:
                raise UnknownFieldError(name, self._plan.destination_type)
