"""Typed metadata properties attached to recordings, events and binaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

import numpy as np


@dataclass(frozen=True)
class Property:
    """A single typed scalar. ``type_name`` is what the container stores."""

    value: Any
    type_name: str = field(init=False, default="")


@dataclass(frozen=True)
class StringProperty(Property):
    value: str
    type_name: str = field(init=False, default="string")


@dataclass(frozen=True)
class IntProperty(Property):
    value: int
    type_name: str = field(init=False, default="int32")

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", int(self.value))


@dataclass(frozen=True)
class Float32Property(Property):
    value: float
    type_name: str = field(init=False, default="float32")

    def __post_init__(self) -> None:
        # Store exactly what a 32-bit float can represent
        object.__setattr__(self, "value", float(np.float32(self.value)))


@dataclass(frozen=True)
class BoolProperty(Property):
    value: bool
    type_name: str = field(init=False, default="bool")

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bool(self.value))


PROPERTY_TYPES: dict[str, type[Property]] = {
    "string": StringProperty,
    "int32": IntProperty,
    "float32": Float32Property,
    "bool": BoolProperty,
}


class MetadataBlock(Mapping[str, Property]):
    """Immutable name -> property mapping."""

    def __init__(self, properties: Mapping[str, Property] | None = None):
        self._properties = dict(properties or {})

    def __getitem__(self, key: str) -> Property:
        return self._properties[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v.value!r}" for k, v in self._properties.items())
        return f"MetadataBlock({inner})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetadataBlock):
            return NotImplemented
        return self._properties == other._properties

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {k: {"type": p.type_name, "value": p.value} for k, p in self._properties.items()}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Mapping[str, Any]]) -> MetadataBlock:
        return cls({k: PROPERTY_TYPES[v["type"]](v["value"]) for k, v in raw.items()})
