"""Unit tests for MapperSettings and MapperConfiguration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

import pytest
from pydantic import BaseModel

from shape_map.core.configuration import MapperConfiguration, MapperSettings, default_activator
from shape_map.core.conventions import same_name_ignore_case
from shape_map.core.exceptions import (
    ConfigurationError,
    DefinitionError,
    DuplicateMapError,
    MapNotFoundError,
    MissingConversionError,
)
from shape_map.core.shape import ShapeProvider, shapes
from shape_map.definitions.base import MapperDefinition
from shape_map.mapping.builder import MappingBuilder
from shape_map.mapping.plan import ConventionPlan, ManualPlan


@dataclass
class Order:
    id: int = 0
    placed: datetime = datetime(2000, 1, 1)


@dataclass
class OrderDto:
    id: int = 0
    placed: str = ""


@dataclass
class Invoice:
    total: float = 0.0


@dataclass
class InvoiceDto:
    total: str = ""


class Product(BaseModel):
    sku: str
    price: float


calls: list[str] = []


class FirstDefinition(MapperDefinition, discoverable=False):
    def setup(self, mapping: MappingBuilder) -> None:
        calls.append("first")
        mapping.map(Order, OrderDto)


class SecondDefinition(MapperDefinition, discoverable=False):
    def setup(self, mapping: MappingBuilder) -> None:
        calls.append("second")


class BrokenConstructor(MapperDefinition, discoverable=False):
    def __init__(self, required: str) -> None:
        self.required = required


class BrokenSetup(MapperDefinition, discoverable=False):
    def setup(self, mapping: MappingBuilder) -> None:
        raise RuntimeError("setup exploded")


class DuplicateSetup(MapperDefinition, discoverable=False):
    def setup(self, mapping: MappingBuilder) -> None:
        mapping.map(Order, OrderDto)
        mapping.map(Order, OrderDto)


class InvalidMapDefinition(MapperDefinition, discoverable=False):
    def setup(self, mapping: MappingBuilder) -> None:
        mapping.map(Invoice, InvoiceDto)


class SelfInitializing(MapperDefinition, discoverable=False):
    def __init__(self) -> None:
        self.configuration: MapperConfiguration | None = None

    def setup(self, mapping: MappingBuilder) -> None:
        assert self.configuration is not None
        self.configuration.initialize()


@pytest.fixture(autouse=True)
def _reset_calls() -> None:
    calls.clear()


def _configuration(*definitions, **settings) -> MapperConfiguration:
    return MapperConfiguration(
        MapperSettings(**settings), definitions=list(definitions), shapes=ShapeProvider()
    )


class TestMapperSettings:
    def test_defaults(self) -> None:
        settings = MapperSettings()
        assert settings.create_missing_maps is True
        assert settings.initialize_eagerly is True
        assert settings.datetime_format is None
        assert settings.date_format is None

    def test_validation(self) -> None:
        with pytest.raises(ValueError):
            MapperSettings(create_missing_maps="definitely")  # type: ignore[arg-type]


class TestMapperConfigurationDefaults:
    def test_default_state(self, configuration: MapperConfiguration) -> None:
        assert configuration.conventions == [same_name_ignore_case]
        assert len(configuration.conversions) == 6
        assert configuration.create_missing_maps is True
        assert len(configuration.plans) == 0
        assert configuration.initialized is False

    def test_default_collaborators(self) -> None:
        configuration = MapperConfiguration(definitions=[])
        assert configuration.default_activator is default_activator
        assert configuration.shapes is shapes

    def test_formats_flow_into_default_conversions(self) -> None:
        configuration = _configuration(datetime_format="%Y/%m/%d")
        assert configuration.conversions.apply(datetime, str, datetime(2024, 1, 2)) == "2024/01/02"

    def test_default_activator_plain_and_pydantic(self) -> None:
        assert isinstance(default_activator(Order), Order)
        product = default_activator(Product)
        assert isinstance(product, Product)
        product.sku = "A-1"
        assert product.sku == "A-1"


class TestRegistration:
    def test_add_map(self, configuration: MapperConfiguration) -> None:
        plan = configuration.add_map(Order, OrderDto)
        assert isinstance(plan, ManualPlan)
        assert plan.use_conventions is True
        assert configuration.plans.get(Order, OrderDto) is plan

    def test_add_map_twice(self, configuration: MapperConfiguration) -> None:
        configuration.add_map(Order, OrderDto)
        with pytest.raises(DuplicateMapError):
            configuration.add_map(Order, OrderDto)

    def test_add_conversion_overwrites(self, configuration: MapperConfiguration) -> None:
        configuration.add_conversion(int, str, lambda v: f"#{v}")
        assert configuration.conversions.apply(int, str, 3) == "#3"


class TestResolvePlan:
    def test_auto_creates_and_builds(self, configuration: MapperConfiguration) -> None:
        plan = configuration.resolve_plan(Order, OrderDto)
        assert type(plan) is ConventionPlan
        assert plan.initialized is True
        assert configuration.resolve_plan(Order, OrderDto) is plan

    def test_auto_creation_disabled(self, strict_configuration: MapperConfiguration) -> None:
        with pytest.raises(MapNotFoundError, match="Order to OrderDto") as exc_info:
            strict_configuration.resolve_plan(Order, OrderDto)
        assert isinstance(exc_info.value, ConfigurationError)

    def test_failed_auto_creation_registers_nothing(
        self, configuration: MapperConfiguration
    ) -> None:
        with pytest.raises(MissingConversionError):
            configuration.resolve_plan(Invoice, InvoiceDto)
        assert (Invoice, InvoiceDto) not in configuration.plans


class TestInitialize:
    def test_activates_definitions_in_order(self) -> None:
        configuration = _configuration(FirstDefinition, SecondDefinition).initialize()
        assert calls == ["first", "second"]
        assert configuration.initialized is True
        assert configuration.plans.get(Order, OrderDto).initialized is True

    def test_accepts_instances_and_providers(self) -> None:
        _configuration(SecondDefinition(), FirstDefinition()).initialize()
        MapperConfiguration(
            definitions=lambda: [FirstDefinition], shapes=ShapeProvider()
        ).initialize()
        assert calls == ["second", "first", "first"]

    def test_runs_once(self) -> None:
        configuration = _configuration(FirstDefinition)
        assert configuration.initialize() is configuration
        configuration.initialize()
        assert calls == ["first"]

    def test_lazy_plan_compilation(self) -> None:
        configuration = _configuration(FirstDefinition, initialize_eagerly=False).initialize()
        plan = configuration.plans.get(Order, OrderDto)
        assert plan.initialized is False
        assert len(plan.lookups) == 2

    def test_eager_compilation_surfaces_errors(self) -> None:
        with pytest.raises(MissingConversionError):
            _configuration(InvalidMapDefinition).initialize()

    def test_broken_constructor_is_fatal(self) -> None:
        configuration = _configuration(BrokenConstructor, FirstDefinition)
        with pytest.raises(DefinitionError, match="BrokenConstructor"):
            configuration.initialize()
        assert calls == []
        assert configuration.initialized is False

    def test_broken_setup_is_fatal(self) -> None:
        with pytest.raises(DefinitionError, match="setup exploded") as exc_info:
            _configuration(BrokenSetup).initialize()
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_configuration_errors_in_setup_are_wrapped(self) -> None:
        with pytest.raises(DefinitionError) as exc_info:
            _configuration(DuplicateSetup).initialize()
        assert isinstance(exc_info.value.__cause__, DuplicateMapError)

    def test_later_mutation_does_not_rebuild_plans(self) -> None:
        configuration = _configuration(FirstDefinition).initialize()
        plan = configuration.plans.get(Order, OrderDto)
        lookups = plan.lookups
        configuration.add_conversion(datetime, str, lambda v: "changed")
        assert plan.lookups is lookups
        dto = OrderDto()
        plan.map(Order(id=1, placed=datetime(2024, 1, 2)), dto)
        assert dto.placed == "2024-01-02T00:00:00"

    def test_initialize_from_own_definition_fails_fast(self) -> None:
        definition = SelfInitializing()
        configuration = _configuration(definition)
        definition.configuration = configuration
        with pytest.raises(DefinitionError, match="own definitions") as exc_info:
            configuration.initialize()
        assert isinstance(exc_info.value.__cause__, ConfigurationError)
        assert configuration.initialized is False

    def test_logs_initialization(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="shape_map"):
            _configuration(FirstDefinition).initialize()
        assert "initialized with 1 maps" in caplog.text
