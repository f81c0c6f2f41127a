"""I/O contracts for Step 01: OpenSfM reconstruction -> recording."""

from pathlib import Path

from pydantic import BaseModel, Field


class OpenSfmConvertInput(BaseModel):
    reconstruction_path: Path = Field(..., description="Path to OpenSfM reconstruction.json")
    output_path: Path = Field(..., description="Path of the recording container to write")
    mesh_paths: list[Path] = Field(default_factory=list, description="Extra PLY meshes/point clouds to embed")


class OpenSfmConvertOutput(BaseModel):
    output_path: Path = Field(..., description="Path of the written recording container")
    num_cameras: int = Field(..., description="Number of camera subjects")
    num_shots: int = Field(..., description="Number of shots converted")
    num_points: int = Field(..., description="Number of sparse points in the point cloud")
    num_binaries: int = Field(..., description="Binaries attached to the root recording")
    timestamps_inferred: bool = Field(..., description="True if shot times came from shot indices")
    bytes_written: int = Field(0, description="Size of the container file")
