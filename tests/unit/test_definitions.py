"""Unit tests for MapperDefinition discovery."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from shape_map.core.configuration import MapperConfiguration
from shape_map.core.shape import ShapeProvider
from shape_map.definitions.base import MapperDefinition, discover_definitions
from shape_map.mapping.builder import MappingBuilder


@dataclass
class Widget:
    code: str = ""


@dataclass
class WidgetDto:
    code: str = ""


@dataclass
class Gadget:
    code: str = ""


@dataclass
class Gizmo:
    code: str = ""


class WidgetDefinition(MapperDefinition):
    def setup(self, mapping: MappingBuilder) -> None:
        mapping.map(Widget, WidgetDto)


class HiddenDefinition(MapperDefinition, discoverable=False):
    def setup(self, mapping: MappingBuilder) -> None:
        mapping.map(Gadget, WidgetDto)


class VisibleChildDefinition(HiddenDefinition):
    def setup(self, mapping: MappingBuilder) -> None:
        mapping.map(Gadget, Widget)


class SharedBaseDefinition(MapperDefinition):
    def describe(self) -> str:
        return type(self).__name__


class GizmoDefinition(SharedBaseDefinition):
    def setup(self, mapping: MappingBuilder) -> None:
        mapping.map(Gizmo, WidgetDto)


class TestDiscovery:
    def test_finds_concrete_subclasses(self) -> None:
        found = discover_definitions()
        assert WidgetDefinition in found
        assert VisibleChildDefinition in found

    def test_opted_out_classes_are_skipped(self) -> None:
        assert HiddenDefinition not in discover_definitions()
        assert HiddenDefinition.discoverable is False
        assert VisibleChildDefinition.discoverable is True

    def test_bases_without_setup_are_skipped(self) -> None:
        found = discover_definitions()
        assert SharedBaseDefinition not in found
        assert GizmoDefinition in found

    def test_breadth_first_order(self) -> None:
        found = discover_definitions()
        assert found.index(WidgetDefinition) < found.index(VisibleChildDefinition)

    def test_base_setup_is_abstract(self) -> None:
        with pytest.raises(NotImplementedError):
            MapperDefinition().setup(MappingBuilder(MapperConfiguration(definitions=[])))


class TestDefaultDiscovery:
    def test_configuration_discovers_by_default(self) -> None:
        configuration = MapperConfiguration(shapes=ShapeProvider()).initialize()
        assert configuration.plans.has(Widget, WidgetDto)
        assert configuration.plans.has(Gadget, Widget)
        assert configuration.plans.has(Gizmo, WidgetDto)
        assert not configuration.plans.has(Gadget, WidgetDto)
