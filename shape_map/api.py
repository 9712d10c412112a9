"""Process-wide mapping configuration and module-level entry points.

Exactly one configuration is current for the process. It is created and
initialized lazily on first use, under a lock, unless ``configure`` has
installed one first.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from shape_map.core.configuration import MapperConfiguration
from shape_map.core.engine import ObjectMapper
from shape_map.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_lock = threading.Lock()
_held = threading.local()
_current: MapperConfiguration | None = None


def _check_reentry() -> None:
    if getattr(_held, "active", False):
        raise ConfigurationError(
            "The process-wide mapping configuration cannot be used while it is being initialized"
        )


@contextmanager
def _locked() -> Iterator[None]:
    """Hold the module lock. Re-entry from the holding thread fails fast."""
    _check_reentry()
    with _lock:
        _held.active = True
        try:
            yield
        finally:
            _held.active = False


def current_configuration() -> MapperConfiguration:
    """The process-wide configuration, created with defaults on first access."""
    global _current
    _check_reentry()
    configuration = _current
    if configuration is not None:
        return configuration
    with _locked():
        if _current is None:
            _current = MapperConfiguration().initialize()
        return _current


def configure(configuration: MapperConfiguration) -> MapperConfiguration:
    """Initialize ``configuration`` and make it the process-wide one."""
    global _current
    with _locked():
        configuration.initialize()
        if _current is not None and _current is not configuration:
            logger.warning("Replacing the process-wide mapping configuration")
        _current = configuration
    return configuration


def reset_configuration() -> None:
    """Drop the process-wide configuration; the next access recreates it."""
    global _current
    with _locked():
        _current = None


def map_to(source: Any, destination_type: type[T], *, map_as: type | None = None) -> T | None:
    return ObjectMapper(current_configuration()).map_to(source, destination_type, map_as=map_as)


def map_into(source: Any, destination: T) -> T | None:
    return ObjectMapper(current_configuration()).map_into(source, destination)


def map_many(
    sources: Iterable[Any] | None,
    destination_type: type[T],
    *,
    source_type: type | None = None,
    map_as: type | None = None,
) -> list[T | None]:
    return ObjectMapper(current_configuration()).map_many(
        sources, destination_type, source_type=source_type, map_as=map_as
    )


def map_from(destination: T, *sources: Any) -> T:
    return ObjectMapper(current_configuration()).map_from(destination, *sources)
