"""Root recording assembly."""

from __future__ import annotations

from typing import Sequence

from photorap.core.contracts import ReconstructionSchema
from photorap.recording.metadata import BoolProperty, IntProperty, MetadataBlock
from photorap.recording.recording import Binary, Recording
from ._assets import POINTS_INVERT_VERTICAL
from ._poses import POSE_INVERT_VERTICAL

ROOT_ID = "opensfm"
ROOT_NAME = "Open SFM"


def root_metadata(recon: ReconstructionSchema) -> MetadataBlock:
    return MetadataBlock({
        "cameras": IntProperty(len(recon.cameras)),
        "shots": IntProperty(len(recon.shots)),
        "points": IntProperty(len(recon.points)),
        "poses vertical axis inverted": BoolProperty(POSE_INVERT_VERTICAL),
        "points vertical axis inverted": BoolProperty(POINTS_INVERT_VERTICAL),
    })


def assemble_recording(
    recon: ReconstructionSchema,
    subjects: Sequence[Recording],
    binaries: Sequence[Binary],
) -> Recording:
    return Recording(
        id=ROOT_ID,
        name=ROOT_NAME,
        recordings=tuple(subjects),
        metadata=root_metadata(recon),
        binaries=tuple(binaries),
    )
