"""Split a reconstruction into one subject recording per camera."""

from __future__ import annotations

import logging

from photorap.core.contracts import CameraSchema, ReconstructionSchema
from photorap.recording.metadata import (
    Float32Property,
    IntProperty,
    MetadataBlock,
    StringProperty,
)
from photorap.recording.recording import Recording
from ._poses import build_capture_collections, transform_shot
from ._timestamps import shots_have_timestamp

logger = logging.getLogger(__name__)


def camera_metadata(camera: CameraSchema) -> MetadataBlock:
    return MetadataBlock({
        "Projection Type": StringProperty(camera.projection_type),
        "Width": IntProperty(camera.width),
        "Height": IntProperty(camera.height),
        "Focal": Float32Property(camera.focal),
        "K1": Float32Property(camera.k1),
        "K2": Float32Property(camera.k2),
    })


def camera_to_subject(recon: ReconstructionSchema, camera_id: str, infer_timestamps: bool) -> Recording:
    """Build the subject recording for ``camera_id`` from its shots."""
    poses = [
        transform_shot(shot_id, shot, infer_timestamps)
        for shot_id, shot in recon.shots.items()
        if shot.camera == camera_id
    ]
    collections = build_capture_collections(poses)
    logger.debug(f"Camera '{camera_id}': {len(poses)} shots")

    return Recording(
        id=camera_id,
        name=camera_id,
        capture_collections=collections,
        metadata=camera_metadata(recon.cameras[camera_id]),
    )


def reconstruction_to_subjects(recon: ReconstructionSchema) -> list[Recording]:
    """One subject per camera, in camera order. Cameras without shots stay empty."""
    infer_timestamps = not shots_have_timestamp(recon.shots)
    if infer_timestamps:
        logger.info("No shot has a capture time; using shot indices as timestamps")
    return [camera_to_subject(recon, camera_id, infer_timestamps) for camera_id in recon.cameras]
