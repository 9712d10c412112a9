"""ShapeMap exception hierarchy.

All exceptions are ShapeMap-specific. Raw introspection and attribute
errors are never exposed to callers; they are chained as ``__cause__``.
"""

from __future__ import annotations

from typing import Any


def _name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)


class ShapeMapError(Exception):
    """Base exception for all ShapeMap errors."""


# --- Configuration ---


class ConfigurationError(ShapeMapError):
    """Raised when a plan cannot be built or resolved."""


class NoConventionsError(ConfigurationError):
    """Raised when a plan is compiled with zero conventions registered."""

    def __init__(self, source_type: type, destination_type: type) -> None:
        self.source_type = source_type
        self.destination_type = destination_type
        super().__init__(
            f"No conventions configured to map {_name(source_type)} to {_name(destination_type)}"
        )


class FieldAccessError(ConfigurationError):
    """Raised when a matched field cannot be read from or written to."""

    def __init__(self, field_name: str, owner: type, access: str) -> None:
        self.field_name = field_name
        self.owner = owner
        self.access = access
        super().__init__(f"Field '{field_name}' on {_name(owner)} is not {access}")


class MissingConversionError(ConfigurationError):
    """Raised when matched fields differ in type and no conversion exists."""

    def __init__(
        self,
        source_type: Any,
        destination_type: Any,
        field_name: str | None = None,
    ) -> None:
        self.source_type = source_type
        self.destination_type = destination_type
        self.field_name = field_name
        detail = f" for field '{field_name}'" if field_name else ""
        super().__init__(
            f"No conversion from {_name(source_type)} to {_name(destination_type)}{detail}"
        )


class MapNotFoundError(ConfigurationError):
    """Raised when no plan exists for a pair and auto-creation is disabled."""

    def __init__(self, source_type: type, destination_type: type) -> None:
        self.source_type = source_type
        self.destination_type = destination_type
        super().__init__(
            f"No map configured to map from {_name(source_type)} to {_name(destination_type)}"
        )


class DuplicateMapError(ConfigurationError):
    """Raised when a second plan is registered for the same shape pair."""

    def __init__(self, source_type: type, destination_type: type) -> None:
        self.source_type = source_type
        self.destination_type = destination_type
        super().__init__(
            f"A map from {_name(source_type)} to {_name(destination_type)} is already registered"
        )


class UnknownFieldError(ConfigurationError):
    """Raised when a builder call names a field the shape does not have."""

    def __init__(self, field_name: str, owner: type) -> None:
        self.field_name = field_name
        self.owner = owner
        super().__init__(f"{_name(owner)} has no field '{field_name}'")


class DefinitionError(ConfigurationError):
    """Raised when a mapper definition cannot be activated."""

    def __init__(self, definition: str, detail: str) -> None:
        self.definition = definition
        super().__init__(f"There was an error activating mapper definition {definition}: {detail}")


# --- Conversion ---


class ConversionError(ShapeMapError):
    """Raised when a registered conversion function fails on a value."""

    def __init__(self, value_type: type, source_type: Any, destination_type: Any) -> None:
        self.value_type = value_type
        self.source_type = source_type
        self.destination_type = destination_type
        super().__init__(
            f"There was an error converting source {_name(value_type)} "
            f"({_name(source_type)} -> {_name(destination_type)})"
        )


# --- Mapping ---


class MappingError(ShapeMapError):
    """Raised when reading, converting or writing fails during plan execution."""

    def __init__(
        self,
        source_type: Any,
        destination_type: Any,
        detail: str,
        field_name: str | None = None,
    ) -> None:
        self.source_type = source_type
        self.destination_type = destination_type
        self.field_name = field_name
        super().__init__(
            f"Error mapping {_name(source_type)} to {_name(destination_type)}: {detail}"
        )
