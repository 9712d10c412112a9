"""Shape introspection.

A Shape is the field-level description of a type: every field carries a
name, a declared type and read/write capability flags. Supports
dataclasses, Pydantic models and plain classes, plus explicit
descriptors registered ahead of time.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import threading
import typing
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel
from pydantic_core import PydanticUndefined

logger = logging.getLogger(__name__)


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def type_name(tp: Any) -> str:
    """Name of a declared type, as used by type-name based ignore lists."""
    return getattr(tp, "__name__", None) or str(tp)


@dataclass(frozen=True)
class Field:
    """A named, typed member of a Shape."""

    name: str
    type: Any
    readable: bool = True
    writable: bool = True
    owner: type | None = None

    @property
    def type_name(self) -> str:
        return type_name(self.type)

    def get(self, instance: Any) -> Any:
        return getattr(instance, self.name)

    def set(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)


@dataclass(frozen=True)
class Shape:
    """Field-level description of one type. Compared by the type it describes."""

    type: type
    fields: tuple[Field, ...]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Shape) and other.type is self.type

    def __hash__(self) -> int:
        return hash(self.type)

    def field(self, name: str) -> Field | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolve annotations, falling back to the raw ones on forward-ref failure."""
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(getattr(klass, "__annotations__", {}))
        return hints


def _is_classvar(tp: Any) -> bool:
    return tp is ClassVar or typing.get_origin(tp) is ClassVar


def _pydantic_fields(cls: type) -> list[Field]:
    frozen_model = bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    fields = [
        Field(
            name=name,
            type=info.annotation if info.annotation is not None else Any,
            readable=True,
            writable=not (frozen_model or info.frozen),
            owner=cls,
        )
        for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
    ]
    for name, info in getattr(cls, "model_computed_fields", {}).items():
        returns = info.return_type
        if returns is PydanticUndefined:
            returns = Any
        fields.append(Field(name=name, type=returns, readable=True, writable=False, owner=cls))
    return fields


def _dataclass_fields(cls: type) -> list[Field]:
    hints = _type_hints(cls)
    frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return [
        Field(
            name=f.name,
            type=hints.get(f.name, f.type),
            readable=True,
            writable=not frozen,
            owner=cls,
        )
        for f in dataclasses.fields(cls)
    ]


def _plain_fields(cls: type) -> list[Field]:
    """Public annotations, properties and ``__init__`` parameters of a plain class."""
    fields: dict[str, Field] = {}

    for name, tp in _type_hints(cls).items():
        if name.startswith("_") or _is_classvar(tp):
            continue
        fields[name] = Field(name=name, type=tp, owner=cls)

    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if name.startswith("_") or not isinstance(member, property):
                continue
            returns = Any
            if member.fget is not None:
                try:
                    returns = typing.get_type_hints(member.fget).get("return", Any)
                except (NameError, TypeError):
                    returns = Any
            fields[name] = Field(
                name=name,
                type=returns,
                readable=member.fget is not None,
                writable=member.fset is not None,
                owner=cls,
            )

    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
    except (ValueError, TypeError):
        sig = None
    if sig is not None:
        try:
            init_hints = typing.get_type_hints(cls.__init__)  # type: ignore[misc]
        except (NameError, TypeError):
            init_hints = {}
        for name, param in sig.parameters.items():
            if name == "self" or name.startswith("_") or name in fields:
                continue
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            fields[name] = Field(name=name, type=init_hints.get(name, Any), owner=cls)

    return list(fields.values())


class ShapeProvider:
    """Type-indexed, cached provider of Shapes.

    Each distinct type is introspected once; later calls return the cached
    Shape. Explicitly registered descriptors take precedence over
    introspection.
    """

    def __init__(self) -> None:
        self._shapes: dict[type, Shape] = {}
        self._lock = threading.Lock()

    def register(self, cls: type, fields: list[Field] | tuple[Field, ...]) -> Shape:
        """Register an explicit field list for ``cls``."""
        shape = Shape(
            type=cls,
            fields=tuple(dataclasses.replace(f, owner=f.owner or cls) for f in fields),
        )
        with self._lock:
            self._shapes[cls] = shape
        return shape

    def describe(self, cls: type) -> Shape:
        shape = self._shapes.get(cls)
        if shape is not None:
            return shape
        with self._lock:
            shape = self._shapes.get(cls)
            if shape is None:
                shape = Shape(type=cls, fields=tuple(self._introspect(cls)))
                self._shapes[cls] = shape
                logger.debug("Described %s with fields %s", cls.__name__, shape.names)
        return shape

    def __contains__(self, cls: object) -> bool:
        return cls in self._shapes

    @staticmethod
    def _introspect(cls: type) -> list[Field]:
        # Pydantic model
        if _is_pydantic_model(cls):
            return _pydantic_fields(cls)

        # Dataclass
        if dataclasses.is_dataclass(cls):
            return _dataclass_fields(cls)

        # Plain class
        return _plain_fields(cls)


shapes = ShapeProvider()
