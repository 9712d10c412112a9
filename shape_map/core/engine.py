"""Mapping engine.

The ObjectMapper resolves (or builds) the plan for a source/destination
pair, instantiates the destination, and executes the plan. A ``None``
source is a no-op at every entry point.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from shape_map.core.configuration import MapperConfiguration
from shape_map.core.exceptions import ConfigurationError, MappingError
from shape_map.mapping.plan import ConventionPlan

T = TypeVar("T")


class ObjectMapper:
    """Maps instances between types using a MapperConfiguration.

    Args:
        configuration: The configuration to map with. Defaults to the
            process-wide current configuration at construction time.
    """

    def __init__(self, configuration: MapperConfiguration | None = None) -> None:
        if configuration is None:
            from shape_map.api import current_configuration

            configuration = current_configuration()
        self.configuration = configuration

    def map_to(
        self,
        source: Any,
        destination_type: type[T],
        *,
        map_as: type | None = None,
    ) -> T | None:
        """Map ``source`` into a new ``destination_type`` instance.

        ``map_as`` resolves the plan against another destination type
        (typically a base class) while still instantiating
        ``destination_type``.
        """
        if source is None:
            return None
        plan = self.configuration.resolve_plan(type(source), map_as or destination_type)
        destination = self.create_destination(source, plan, destination_type)
        plan.map(source, destination)
        return destination

    def map_into(self, source: Any, destination: T) -> T | None:
        """Map ``source`` onto an existing ``destination``.

        Raises:
            ConfigurationError: If ``destination`` is None.
        """
        if source is None:
            return None
        if destination is None:
            raise ConfigurationError("Destination object must not be None")
        plan = self.configuration.resolve_plan(type(source), type(destination))
        plan.map(source, destination)
        return destination

    def map_many(
        self,
        sources: Iterable[Any] | None,
        destination_type: type[T],
        *,
        source_type: type | None = None,
        map_as: type | None = None,
    ) -> list[T | None]:
        """Map a sequence, resolving each plan once per call.

        With ``source_type`` every element shares that type's plan. Without
        it each element uses the plan for its own runtime type. ``None``
        elements map to ``None``.
        """
        if sources is None:
            return []
        target = map_as or destination_type
        plans: dict[type, ConventionPlan] = {}

        def plan_for(item: Any) -> ConventionPlan:
            key = source_type or type(item)
            plan = plans.get(key)
            if plan is None:
                plan = plans[key] = self.configuration.resolve_plan(key, target)
            return plan

        results: list[T | None] = []
        for item in sources:
            if item is None:
                results.append(None)
                continue
            plan = plan_for(item)
            destination = self.create_destination(item, plan, destination_type)
            plan.map(item, destination)
            results.append(destination)
        return results

    def map_from(self, destination: T, *sources: Any) -> T:
        """Apply each source onto ``destination`` in order; later sources win."""
        for source in sources:
            self.map_into(source, destination)
        return destination

    def create_destination(
        self,
        source: Any,
        plan: ConventionPlan,
        destination_type: type[T],
    ) -> T:
        """Build a destination with the plan's activator, else the default one.

        Raises:
            MappingError: If the activator fails.
        """
        try:
            destination = plan.create_destination(source)
            if destination is None:
                destination = self.configuration.default_activator(destination_type)
        except Exception as e:
            raise MappingError(
                type(source),
                destination_type,
                f"Could not create a {destination_type.__name__} instance",
            ) from e
        return destination  # type: ignore[no-any-return]

    def mapper_for(self, destination_type: type[T]) -> TypedMapper[T]:
        """A Mapper bound to one destination type."""
        return TypedMapper(self, destination_type)


class TypedMapper(Generic[T]):
    """Mapper bound to a single destination type.

    Implements the ``Mapper`` protocol.
    """

    def __init__(self, mapper: ObjectMapper, destination_type: type[T]) -> None:
        self._mapper = mapper
        self._destination_type = destination_type

    @property
    def destination_type(self) -> type[T]:
        return self._destination_type

    def map_one(self, source: Any) -> T | None:
        return self._mapper.map_to(source, self._destination_type)

    def map_many(self, sources: Iterable[Any] | None) -> list[T | None]:
        return self._mapper.map_many(sources, self._destination_type)
