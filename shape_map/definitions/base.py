"""Mapper definition base class and discovery.

Applications subclass ``MapperDefinition`` and declare their maps in
``setup``. Concrete subclasses are discovered when a configuration
initializes, unless opted out with ``discoverable=False``. Subclasses that
leave ``setup`` alone are treated as shared bases and skipped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from shape_map.mapping.builder import MappingBuilder


class MapperDefinition:
    """Base class for mapper definitions.

    Subclasses must be constructible without arguments::

        class UserMaps(MapperDefinition):
            def setup(self, mapping: MappingBuilder) -> None:
                mapping.map(User, UserDto).ignore("password")
    """

    discoverable: ClassVar[bool] = True

    def __init_subclass__(cls, discoverable: bool = True, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.discoverable = discoverable

    def setup(self, mapping: MappingBuilder) -> None:
        """Declare maps, conventions and conversions."""
        raise NotImplementedError


def discover_definitions() -> list[type[MapperDefinition]]:
    """Discoverable subclasses that override ``setup``, breadth-first in definition order."""
    found: list[type[MapperDefinition]] = []
    pending = list(MapperDefinition.__subclasses__())
    while pending:
        cls = pending.pop(0)
        pending.extend(cls.__subclasses__())
        if cls.discoverable and cls.setup is not MapperDefinition.setup and cls not in found:
            found.append(cls)
    return found
