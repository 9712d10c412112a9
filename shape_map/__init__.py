"""ShapeMap - convention-based object-to-object mapping engine."""

from __future__ import annotations

from shape_map.api import (
    configure,
    current_configuration,
    map_from,
    map_into,
    map_many,
    map_to,
    reset_configuration,
)
from shape_map.core.configuration import MapperConfiguration, MapperSettings
from shape_map.core.conventions import same_name_ignore_case, same_name_ignore_separators
from shape_map.core.conversion import Conversion, ConversionRegistry
from shape_map.core.engine import ObjectMapper, TypedMapper
from shape_map.core.exceptions import (
    ConfigurationError,
    ConversionError,
    DefinitionError,
    DuplicateMapError,
    FieldAccessError,
    MapNotFoundError,
    MappingError,
    MissingConversionError,
    NoConventionsError,
    ShapeMapError,
    UnknownFieldError,
)
from shape_map.core.registry import PlanRegistry
from shape_map.core.shape import Field, Shape, ShapeProvider, shapes
from shape_map.definitions.base import MapperDefinition, discover_definitions
from shape_map.mapping.builder import MapBuilder, MappingBuilder
from shape_map.mapping.plan import ConventionPlan, FieldLookup, ManualPlan
from shape_map.mapping.protocol import Mapper

__all__ = [
    # Process-wide API
    "configure",
    "current_configuration",
    "reset_configuration",
    "map_to",
    "map_into",
    "map_many",
    "map_from",
    # Engine
    "ObjectMapper",
    "TypedMapper",
    "Mapper",
    # Configuration
    "MapperConfiguration",
    "MapperSettings",
    "PlanRegistry",
    # Definitions
    "MapperDefinition",
    "discover_definitions",
    "MappingBuilder",
    "MapBuilder",
    # Plans
    "ConventionPlan",
    "ManualPlan",
    "FieldLookup",
    # Shapes
    "Field",
    "Shape",
    "ShapeProvider",
    "shapes",
    # Conventions and conversions
    "same_name_ignore_case",
    "same_name_ignore_separators",
    "Conversion",
    "ConversionRegistry",
    # Exceptions
    "ShapeMapError",
    "ConfigurationError",
    "NoConventionsError",
    "FieldAccessError",
    "MissingConversionError",
    "MapNotFoundError",
    "DuplicateMapError",
    "UnknownFieldError",
    "DefinitionError",
    "ConversionError",
    "MappingError",
]
