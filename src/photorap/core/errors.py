"""Exception taxonomy for the conversion pipeline.

Nothing is retried: every error aborts the current conversion and is
reported to the operator by the CLI. I/O failures are left as the built-in
OSError family.
"""

from __future__ import annotations

from pathlib import Path


class PhotorapError(Exception):
    """Base class for all conversion errors."""


class InputError(PhotorapError, ValueError):
    """Reconstruction document is malformed or holds the wrong number of reconstructions."""


class DataError(PhotorapError, ValueError):
    """Input parsed fine but carries data the pipeline cannot convert."""


class ShotIndexError(DataError):
    """Shot identifier contains no numeric ordinal."""

    def __init__(self, shot_id: str):
        self.shot_id = shot_id
        super().__init__(f"Shot '{shot_id}' has no numeric index in its identifier")


class UnsupportedTopologyError(DataError):
    """External mesh file has a topology other than points or triangles."""

    def __init__(self, topology: str, path: Path | str | None = None):
        self.topology = topology
        self.path = path
        where = f" in {path}" if path is not None else ""
        super().__init__(f"Unsupported mesh topology '{topology}'{where}")


class EncodingError(PhotorapError, RuntimeError):
    """Serializing a mesh or point cloud payload failed."""
