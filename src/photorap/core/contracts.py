"""Pydantic models for the OpenSfM reconstruction document.

Only the fields the conversion reads are modelled; everything else in the
document (GPS priors, reference LLA, rig data...) is ignored.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InputError

logger = logging.getLogger(__name__)

Vector3 = list[float]


class CameraSchema(BaseModel):
    """Camera intrinsics as written by OpenSfM (perspective / brown / fisheye)."""

    model_config = ConfigDict(extra="ignore")

    projection_type: str = ""
    width: int = 0
    height: int = 0
    focal: float = 0.0
    k1: float = 0.0
    k2: float = 0.0


class ShotSchema(BaseModel):
    """A single image pose. ``capture_time`` of 0 means no timestamp was recorded."""

    model_config = ConfigDict(extra="ignore")

    camera: str
    rotation: Vector3 = Field(..., min_length=3, max_length=3)
    translation: Vector3 = Field(..., min_length=3, max_length=3)
    capture_time: float = 0.0
    orientation: int = 1
    scale: float = 1.0


class PointSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    coordinates: Vector3 = Field(..., min_length=3, max_length=3)
    color: Vector3 = Field(..., min_length=3, max_length=3)


class ReconstructionSchema(BaseModel):
    """One reconstruction. Mapping order follows the source document."""

    model_config = ConfigDict(extra="ignore")

    cameras: dict[str, CameraSchema] = Field(default_factory=dict)
    shots: dict[str, ShotSchema] = Field(default_factory=dict)
    points: dict[str, PointSchema] = Field(default_factory=dict)


def parse_reconstruction_document(raw: str | bytes, source: Path | str = "<memory>") -> ReconstructionSchema:
    """Parse a reconstruction.json payload and return its single reconstruction.

    Raises:
        InputError: malformed JSON, schema violations, or a document that does
            not hold exactly one reconstruction.
    """
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InputError(f"{source}: malformed reconstruction JSON: {exc}") from exc

    if not isinstance(document, list):
        raise InputError(f"{source}: expected a list of reconstructions, got {type(document).__name__}")
    if len(document) == 0:
        raise InputError(f"{source}: document contains no reconstruction")
    if len(document) > 1:
        raise InputError(
            f"{source}: document contains {len(document)} reconstructions; "
            "only a single reconstruction per file is supported"
        )

    try:
        recon = ReconstructionSchema.model_validate(document[0])
    except ValidationError as exc:
        raise InputError(f"{source}: invalid reconstruction: {exc}") from exc

    logger.info(
        f"Parsed reconstruction from {source}: {len(recon.cameras)} cameras, "
        f"{len(recon.shots)} shots, {len(recon.points)} points"
    )
    return recon


def load_reconstruction(path: Path) -> ReconstructionSchema:
    """Read and parse a reconstruction file. OSError propagates unchanged."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = f.read()
    return parse_reconstruction_document(raw, source=path)
