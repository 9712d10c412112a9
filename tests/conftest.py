"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from shape_map.api import reset_configuration
from shape_map.core.configuration import MapperConfiguration, MapperSettings
from shape_map.core.engine import ObjectMapper
from shape_map.core.shape import ShapeProvider


@pytest.fixture(autouse=True)
def _isolated_process_configuration() -> Iterator[None]:
    """Each test starts and ends without a process-wide configuration."""
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def configuration() -> MapperConfiguration:
    """Uninitialized configuration with no discovered definitions and private shapes."""
    return MapperConfiguration(definitions=[], shapes=ShapeProvider())


@pytest.fixture
def strict_configuration() -> MapperConfiguration:
    """Configuration that refuses to auto-create missing maps."""
    return MapperConfiguration(
        MapperSettings(create_missing_maps=False), definitions=[], shapes=ShapeProvider()
    )


@pytest.fixture
def mapper(configuration: MapperConfiguration) -> ObjectMapper:
    """ObjectMapper over the initialized ``configuration`` fixture."""
    return ObjectMapper(configuration.initialize())
