"""Mapper definitions - discovered units of mapping configuration."""

from __future__ import annotations

from shape_map.definitions.base import MapperDefinition, discover_definitions

__all__ = ["MapperDefinition", "discover_definitions"]
