"""Recording tree handed to the container writer."""

from __future__ import annotations

from dataclasses import dataclass, field

from .captures import CaptureCollection
from .metadata import MetadataBlock


@dataclass(frozen=True)
class Binary:
    """Named opaque payload (serialized mesh or point cloud)."""

    name: str
    data: bytes
    metadata: MetadataBlock = field(default_factory=MetadataBlock)


@dataclass(frozen=True)
class BinaryReference:
    """Pointer to a payload stored outside the container."""

    name: str
    uri: str
    size: int
    metadata: MetadataBlock = field(default_factory=MetadataBlock)


@dataclass(frozen=True)
class Recording:
    id: str
    name: str
    capture_collections: tuple[CaptureCollection, ...] = ()
    recordings: tuple[Recording, ...] = ()
    metadata: MetadataBlock = field(default_factory=MetadataBlock)
    binaries: tuple[Binary, ...] = ()
    binary_references: tuple[BinaryReference, ...] = ()

    def collection(self, name: str) -> CaptureCollection:
        """Look up a capture collection by name."""
        for c in self.capture_collections:
            if c.name == name:
                return c
        raise KeyError(name)

    def subject(self, recording_id: str) -> Recording:
        """Look up a nested recording by id."""
        for r in self.recordings:
            if r.id == recording_id:
                return r
        raise KeyError(recording_id)
