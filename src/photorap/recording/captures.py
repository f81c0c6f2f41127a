"""Time-stamped captures and the collections that hold them."""

from __future__ import annotations

from dataclasses import dataclass, field
from operator import attrgetter
from typing import Iterable, Literal, Protocol, TypeVar

from .metadata import MetadataBlock

CaptureKind = Literal["position", "euler", "event"]


class Capture(Protocol):
    time: float


CaptureT = TypeVar("CaptureT", bound=Capture)


@dataclass(frozen=True)
class PositionCapture:
    time: float
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class EulerCapture:
    """Rotation as whole degrees, applied Z then X then Y."""

    time: float
    x: int
    y: int
    z: int
    order: str = "ZXY"


@dataclass(frozen=True)
class EventCapture:
    time: float
    name: str
    metadata: MetadataBlock = field(default_factory=MetadataBlock)


def sort_by_time(captures: Iterable[CaptureT]) -> list[CaptureT]:
    """Stable ascending sort on ``time``; ties keep discovery order."""
    return sorted(captures, key=attrgetter("time"))


@dataclass(frozen=True)
class CaptureCollection:
    """Named sequence of one kind of capture, ordered by non-decreasing time."""

    name: str
    kind: CaptureKind
    captures: tuple = ()

    def __len__(self) -> int:
        return len(self.captures)

    @classmethod
    def from_captures(cls, name: str, kind: CaptureKind, captures: Iterable[Capture]) -> CaptureCollection:
        return cls(name=name, kind=kind, captures=tuple(sort_by_time(captures)))
