"""Binary assets: the sparse point cloud and external PLY files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np

from photorap.core.contracts import PointSchema
from photorap.core.errors import UnsupportedTopologyError
from photorap.mesh.model import COLOR, NORMAL, POSITION, Mesh, Topology
from photorap.mesh.ply import read_mesh, to_ply_bytes
from photorap.recording.metadata import IntProperty, MetadataBlock
from photorap.recording.recording import Binary

logger = logging.getLogger(__name__)

POINTS_INVERT_VERTICAL = True
ORIGIN = (0.0, 0.0, 0.0)


def points_to_cloud(points: Mapping[str, PointSchema]) -> Mesh:
    """Point cloud mesh with Y negated and colors scaled to [0, 1]."""
    positions = np.array([p.coordinates for p in points.values()], dtype=np.float64).reshape(-1, 3)
    colors = np.array([p.color for p in points.values()], dtype=np.float64).reshape(-1, 3) / 255.0
    if POINTS_INVERT_VERTICAL:
        positions[:, 1] *= -1.0
    return Mesh.point_cloud({POSITION: positions, COLOR: colors})


def points_to_cloud_binary(points: Mapping[str, PointSchema], name: str = "points.ply") -> Binary:
    cloud = points_to_cloud(points)
    data = to_ply_bytes(cloud)
    logger.info(f"Encoded {len(points)} sparse points as '{name}' ({len(data)} bytes)")
    return Binary(name, data, MetadataBlock({"points": IntProperty(len(points))}))


def prepare_external_mesh(mesh: Mesh, scale: Sequence[float], source: Path | str | None = None) -> Mesh:
    """Keep the attributes the recording uses and apply ``scale``.

    Triangle meshes also get their winding flipped.
    """
    if mesh.topology is Topology.POINT:
        return mesh.with_attributes(POSITION, COLOR).scale(ORIGIN, scale)
    if mesh.topology is Topology.TRIANGLE:
        return mesh.with_attributes(POSITION, NORMAL).scale(ORIGIN, scale).flip_tri_winding()
    raise UnsupportedTopologyError(mesh.topology.value, source)


def ply_to_binary(ply_path: Path | str, scale: Sequence[float]) -> Binary:
    """Load an external PLY and wrap it as a binary named after ``ply_path``."""
    mesh = read_mesh(Path(ply_path))
    prepared = prepare_external_mesh(mesh, scale, source=ply_path)
    data = to_ply_bytes(prepared)
    logger.info(f"Encoded {prepared.topology.value} mesh '{ply_path}' ({len(data)} bytes)")
    return Binary(str(ply_path), data, MetadataBlock({"points": IntProperty(len(prepared.indices))}))
