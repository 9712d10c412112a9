"""Type conversion registry.

Holds conversion functions keyed by the ordered pair
``(source_type, destination_type)``. At most one conversion exists per
pair; registering again overwrites.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from shape_map.core.exceptions import ConversionError, MissingConversionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conversion:
    """A function converting values of ``source_type`` into ``destination_type``."""

    source_type: Any
    destination_type: Any
    function: Callable[[Any], Any]

    def convert(self, value: Any) -> Any:
        try:
            return self.function(value)
        except Exception as e:
            raise ConversionError(type(value), self.source_type, self.destination_type) from e


class ConversionRegistry:
    """Conversions keyed by ordered ``(source_type, destination_type)`` pairs."""

    def __init__(self) -> None:
        self._conversions: dict[tuple[Any, Any], Conversion] = {}

    def register(
        self,
        source_type: Any,
        destination_type: Any,
        function: Callable[[Any], Any],
    ) -> Conversion:
        """Register ``function``, replacing any conversion for the same pair."""
        key = (source_type, destination_type)
        if key in self._conversions:
            logger.debug("Replacing conversion %s -> %s", *key)
        conversion = Conversion(source_type, destination_type, function)
        self._conversions[key] = conversion
        return conversion

    def get(self, source_type: Any, destination_type: Any) -> Conversion | None:
        return self._conversions.get((source_type, destination_type))

    def has(self, source_type: Any, destination_type: Any) -> bool:
        return (source_type, destination_type) in self._conversions

    def apply(self, source_type: Any, destination_type: Any, value: Any) -> Any:
        """Convert ``value`` with the conversion registered for the pair.

        Raises:
            MissingConversionError: If no conversion is registered.
            ConversionError: If the conversion function raises.
        """
        conversion = self.get(source_type, destination_type)
        if conversion is None:
            raise MissingConversionError(source_type, destination_type)
        return conversion.convert(value)

    @property
    def pairs(self) -> list[tuple[Any, Any]]:
        return list(self._conversions)

    def __contains__(self, pair: object) -> bool:
        return pair in self._conversions

    def __len__(self) -> int:
        return len(self._conversions)


def register_defaults(
    registry: ConversionRegistry,
    datetime_format: str | None = None,
    date_format: str | None = None,
) -> None:
    """Register the built-in date/text and integer/text conversions.

    Text formats are locale-independent: ISO 8601 unless an explicit
    ``strftime`` pattern is given, and plain ``str``/``int`` for integers.
    """
    if datetime_format is None:
        registry.register(datetime, str, datetime.isoformat)
        registry.register(str, datetime, datetime.fromisoformat)
    else:
        registry.register(datetime, str, lambda value: value.strftime(datetime_format))
        registry.register(str, datetime, lambda text: datetime.strptime(text, datetime_format))

    if date_format is None:
        registry.register(date, str, date.isoformat)
        registry.register(str, date, date.fromisoformat)
    else:
        registry.register(date, str, lambda value: value.strftime(date_format))
        registry.register(str, date, lambda text: datetime.strptime(text, date_format).date())

    registry.register(int, str, str)
    registry.register(str, int, int)
