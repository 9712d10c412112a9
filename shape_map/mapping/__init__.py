"""Mapping layer - plans, the configuration DSL and the mapper protocol."""

from __future__ import annotations

from shape_map.mapping.builder import MapBuilder, MappingBuilder
from shape_map.mapping.plan import ConventionPlan, FieldLookup, ManualPlan, same_type
from shape_map.mapping.protocol import Mapper

__all__ = [
    "MappingBuilder",
    "MapBuilder",
    "ConventionPlan",
    "ManualPlan",
    "FieldLookup",
    "Mapper",
    "same_type",
]
