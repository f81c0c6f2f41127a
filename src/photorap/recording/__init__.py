"""Recording model: metadata, captures, recordings, container I/O."""

from .captures import (
    CaptureCollection,
    EulerCapture,
    EventCapture,
    PositionCapture,
    sort_by_time,
)
from .container import read_recording, write_recording
from .metadata import (
    BoolProperty,
    Float32Property,
    IntProperty,
    MetadataBlock,
    StringProperty,
)
from .recording import Binary, BinaryReference, Recording

__all__ = [
    "CaptureCollection",
    "EulerCapture",
    "EventCapture",
    "PositionCapture",
    "sort_by_time",
    "read_recording",
    "write_recording",
    "BoolProperty",
    "Float32Property",
    "IntProperty",
    "MetadataBlock",
    "StringProperty",
    "Binary",
    "BinaryReference",
    "Recording",
]
