"""Step 01: Convert an OpenSfM reconstruction into a recording container.

Reads reconstruction.json plus any external PLY files, builds the whole
recording in memory, and only then writes the container. Any failure
leaves no output behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar, Sequence

from photorap.core.contracts import ReconstructionSchema, load_reconstruction
from photorap.core.errors import InputError
from photorap.core.step_base import BaseStep
from photorap.recording.container import write_recording
from photorap.recording.recording import Binary, Recording
from ._assembly import assemble_recording
from ._assets import ply_to_binary, points_to_cloud_binary
from ._subjects import reconstruction_to_subjects
from ._timestamps import shots_have_timestamp
from .config import OpenSfmConvertConfig
from .contracts import OpenSfmConvertInput, OpenSfmConvertOutput

logger = logging.getLogger(__name__)


def reconstruction_to_recording(
    recon: ReconstructionSchema,
    mesh_paths: Sequence[Path] = (),
    config: OpenSfmConvertConfig | None = None,
) -> Recording:
    """Build the root recording for ``recon`` and the external meshes."""
    config = config or OpenSfmConvertConfig()

    subjects = reconstruction_to_subjects(recon)

    binaries: list[Binary] = []
    if config.include_pointcloud:
        binaries.append(points_to_cloud_binary(recon.points, config.pointcloud_name))
    for mesh_path in mesh_paths:
        binaries.append(ply_to_binary(mesh_path, config.mesh_scale))

    return assemble_recording(recon, subjects, binaries)


class OpenSfmConvertStep(BaseStep[OpenSfmConvertInput, OpenSfmConvertOutput, OpenSfmConvertConfig]):
    """OpenSfM reconstruction.json (+ optional PLY files) -> recording container."""

    name: ClassVar[str] = "opensfm_convert"
    input_type: ClassVar = OpenSfmConvertInput
    output_type: ClassVar = OpenSfmConvertOutput
    config_type: ClassVar = OpenSfmConvertConfig

    def validate_inputs(self, inputs: OpenSfmConvertInput) -> bool:
        for mesh_path in inputs.mesh_paths:
            if mesh_path.suffix.lower() != ".ply":
                raise InputError(f"Expected .ply mesh file, got: {mesh_path}")
        if inputs.output_path.is_dir():
            raise InputError(f"Output path is a directory: {inputs.output_path}")
        return True

    def run(self, inputs: OpenSfmConvertInput) -> OpenSfmConvertOutput:
        # --- 1. Load reconstruction ---
        recon = load_reconstruction(inputs.reconstruction_path)

        # --- 2. Build recording (everything in memory) ---
        recording = reconstruction_to_recording(recon, inputs.mesh_paths, self.config)

        # --- 3. Write container ---
        size = write_recording(recording, inputs.output_path)

        return OpenSfmConvertOutput(
            output_path=inputs.output_path,
            num_cameras=len(recon.cameras),
            num_shots=len(recon.shots),
            num_points=len(recon.points),
            num_binaries=len(recording.binaries),
            timestamps_inferred=not shots_have_timestamp(recon.shots),
            bytes_written=size,
        )
