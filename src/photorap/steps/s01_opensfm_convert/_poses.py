"""Per-shot pose transform and per-camera capture collections."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from photorap.core.contracts import ShotSchema
from photorap.recording.captures import (
    CaptureCollection,
    EulerCapture,
    EventCapture,
    PositionCapture,
)
from photorap.recording.metadata import Float32Property, IntProperty, MetadataBlock
from ._timestamps import resolve_shot_time

# Camera positions keep OpenSfM's vertical axis; only the point cloud is
# flipped (see _assets.POINTS_INVERT_VERTICAL). Both land in root metadata.
POSE_INVERT_VERTICAL = False

POSITION_COLLECTION = "Position"
ROTATION_COLLECTION = "Rotation"
EVENT_COLLECTION = "Custom Event"


@dataclass(frozen=True)
class ShotPose:
    """A shot converted to the three captures it contributes."""

    position: PositionCapture
    rotation: EulerCapture
    event: EventCapture


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def quantize_rotation(value: float) -> int:
    """Scale one rotation component by 180 and wrap to whole degrees.

    The remainder keeps the sign of the dividend, so negative inputs stay
    negative (-190 -> -190, -400 -> -40).
    """
    return int(math.fmod(_round_half_away(value * 180.0), 360))


def transform_position(translation: Sequence[float], invert_vertical: bool = POSE_INVERT_VERTICAL) -> tuple[float, float, float]:
    x, y, z = translation
    if invert_vertical:
        y = -y
    return float(x), float(y), float(z)


def transform_shot(shot_id: str, shot: ShotSchema, infer_timestamps: bool) -> ShotPose:
    t = resolve_shot_time(shot_id, shot, infer_timestamps)
    rx, ry, rz = (quantize_rotation(v) for v in shot.rotation)
    event_meta = MetadataBlock({
        "Orientation Index": IntProperty(shot.orientation),
        "Scale": Float32Property(shot.scale),
    })
    return ShotPose(
        position=PositionCapture(t, *transform_position(shot.translation)),
        rotation=EulerCapture(t, rx, ry, rz),
        event=EventCapture(t, shot_id, event_meta),
    )


def build_capture_collections(
    poses: Iterable[ShotPose],
) -> tuple[CaptureCollection, CaptureCollection, CaptureCollection]:
    """Split poses into position/rotation/event collections, each sorted by time.

    The three kinds are sorted independently, so shots with equal times may
    end up in different relative order across collections.
    """
    positions: list[PositionCapture] = []
    rotations: list[EulerCapture] = []
    events: list[EventCapture] = []
    for pose in poses:
        positions.append(pose.position)
        rotations.append(pose.rotation)
        events.append(pose.event)

    return (
        CaptureCollection.from_captures(POSITION_COLLECTION, "position", positions),
        CaptureCollection.from_captures(ROTATION_COLLECTION, "euler", rotations),
        CaptureCollection.from_captures(EVENT_COLLECTION, "event", events),
    )
