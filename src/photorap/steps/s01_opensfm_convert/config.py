"""Configuration for Step 01: OpenSfM reconstruction -> recording."""

from pydantic import BaseModel, Field


class OpenSfmConvertConfig(BaseModel):
    mesh_scale: list[float] = Field(
        default=[1.0, -1.0, 1.0],
        min_length=3,
        max_length=3,
        description="Per-axis scale applied about the origin to external PLY files",
    )
    include_pointcloud: bool = Field(True, description="Attach the sparse point cloud as a binary")
    pointcloud_name: str = Field("points.ply", description="Binary name of the sparse point cloud")
