"""Mapping configuration.

MapperSettings is a Pydantic model for type-safe settings.
MapperConfiguration aggregates the plan registry, conventions,
conversions, shape provider and default activator.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any, Union

from pydantic import BaseModel

from shape_map.core.conventions import Convention, same_name_ignore_case
from shape_map.core.conversion import ConversionRegistry, register_defaults
from shape_map.core.exceptions import ConfigurationError, DefinitionError
from shape_map.core.registry import PlanRegistry
from shape_map.core.shape import ShapeProvider, _is_pydantic_model, shapes
from shape_map.definitions.base import MapperDefinition, discover_definitions
from shape_map.mapping.builder import MappingBuilder
from shape_map.mapping.plan import ConventionPlan, ManualPlan

logger = logging.getLogger(__name__)

DefinitionSource = Union[
    Iterable[Union[type[MapperDefinition], MapperDefinition]],
    Callable[[], Iterable[Union[type[MapperDefinition], MapperDefinition]]],
]


class MapperSettings(BaseModel):
    """Settings for a mapping configuration."""

    create_missing_maps: bool = True
    initialize_eagerly: bool = True
    datetime_format: str | None = None
    date_format: str | None = None


def default_activator(cls: type) -> Any:
    """Construct a destination without arguments.

    Pydantic models are built with ``model_construct`` so required fields
    can be filled in by the mapping afterwards.
    """
    if _is_pydantic_model(cls):
        return cls.model_construct()  # type: ignore[attr-defined]
    return cls()


class MapperConfiguration:
    """Owns all plan, convention and conversion state.

    Args:
        settings: Behavioural settings. Defaults to ``MapperSettings()``.
        definitions: Mapper definitions activated by ``initialize``: an
            iterable of classes or instances, or a provider returning one.
            Defaults to ``discover_definitions``.
        default_activator: Builds a destination from its type when the
            plan has no custom activator.
        shapes: Shape provider used for field introspection.
    """

    def __init__(
        self,
        settings: MapperSettings | None = None,
        *,
        definitions: DefinitionSource | None = None,
        default_activator: Callable[[type], Any] = default_activator,
        shapes: ShapeProvider = shapes,
    ) -> None:
        self.settings = settings or MapperSettings()
        self.default_activator = default_activator
        self.shapes = shapes
        self.plans = PlanRegistry()
        self.conventions: list[Convention] = [same_name_ignore_case]
        self.conversions = ConversionRegistry()
        register_defaults(
            self.conversions,
            datetime_format=self.settings.datetime_format,
            date_format=self.settings.date_format,
        )
        self._definitions = discover_definitions if definitions is None else definitions
        self._initialized = False
        self._initializing = False
        self._lock = threading.RLock()

    @property
    def create_missing_maps(self) -> bool:
        return self.settings.create_missing_maps

    @property
    def initialized(self) -> bool:
        return self._initialized

    def add_map(
        self,
        source_type: type,
        destination_type: type,
        transform: Callable[[Any, Any], None] | None = None,
        *,
        use_conventions: bool = True,
    ) -> ManualPlan:
        """Declare a map, optionally with a manual transform."""
        plan = ManualPlan(self, source_type, destination_type, transform, use_conventions)
        self.plans.add(source_type, destination_type, plan)
        return plan

    def add_plan(self, source_type: type, destination_type: type, plan: ConventionPlan) -> None:
        self.plans.add(source_type, destination_type, plan)

    def add_convention(self, convention: Convention) -> None:
        self.conventions.append(convention)

    def add_conversion(
        self,
        source_type: Any,
        destination_type: Any,
        conversion: Callable[[Any], Any],
    ) -> None:
        self.conversions.register(source_type, destination_type, conversion)

    def resolve_plan(self, source_type: type, destination_type: type) -> ConventionPlan:
        """Return the plan for a pair, auto-creating it when allowed.

        Raises:
            MapNotFoundError: If no plan exists and auto-creation is off.
            ConfigurationError: If an auto-created plan fails to compile.
        """
        factory = self._create_plan if self.create_missing_maps else None
        return self.plans.resolve(source_type, destination_type, factory)

    def _create_plan(self, source_type: type, destination_type: type) -> ConventionPlan:
        plan = ConventionPlan(self, source_type, destination_type)
        plan.initialize()
        return plan

    def initialize(self) -> MapperConfiguration:
        """Activate mapper definitions, then compile declared plans.

        Runs once; later calls return immediately.

        Raises:
            DefinitionError: If a definition cannot be created or set up.
            ConfigurationError: If a declared plan fails to compile, or if
                called again from a definition while initializing.
        """
        if self._initialized:
            return self
        with self._lock:
            if self._initialized:
                return self
            if self._initializing:
                raise ConfigurationError(
                    "Mapping configuration cannot be initialized from one of its own definitions"
                )
            self._initializing = True
            try:
                self._activate_definitions()
                if self.settings.initialize_eagerly:
                    for plan in self.plans.plans():
                        plan.initialize()
            finally:
                self._initializing = False
            self._initialized = True
        logger.info(
            "Mapping configuration initialized with %d maps and %d conversions",
            len(self.plans),
            len(self.conversions),
        )
        return self

    def _activate_definitions(self) -> None:
        source = self._definitions
        definitions = source() if callable(source) else source
        builder = MappingBuilder(self)

        for definition in definitions:
            name = getattr(definition, "__name__", type(definition).__name__)
            if isinstance(definition, type):
                try:
                    definition = definition()
                except Exception as e:
                    raise DefinitionError(name, str(e)) from e
            try:
                definition.setup(builder)
            except DefinitionError:
                raise
            except Exception as e:
                raise DefinitionError(name, str(e)) from e
            logger.debug("Activated mapper definition %s", name)
