"""PLY reader/writer on top of plyfile.

Reads vertices (x/y/z, nx/ny/nz, red/green/blue) plus an optional ``face``
or ``edge`` element and reports the topology they describe. Writes binary
little-endian PLY with float32 properties.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from plyfile import PlyData, PlyElement, PlyParseError

from photorap.core.errors import DataError, EncodingError, UnsupportedTopologyError
from .model import COLOR, NORMAL, POSITION, Mesh, Topology

logger = logging.getLogger(__name__)

_ATTRIBUTE_PROPS = {
    POSITION: ("x", "y", "z"),
    NORMAL: ("nx", "ny", "nz"),
    COLOR: ("red", "green", "blue"),
}


def _read_float3(vertex, names: tuple[str, str, str]) -> np.ndarray | None:
    prop_names = {p.name for p in vertex.properties}
    if not set(names).issubset(prop_names):
        return None
    data = np.column_stack([vertex[n].astype(np.float64) for n in names])
    # Integer colors are 0-255; normalize to unit range
    if names == _ATTRIBUTE_PROPS[COLOR] and np.issubdtype(vertex[names[0]].dtype, np.integer):
        data /= 255.0
    return data


def _face_indices(face, source: Path | str | None = None) -> tuple[Topology, np.ndarray]:
    prop_names = [p.name for p in face.properties]
    key = "vertex_indices" if "vertex_indices" in prop_names else "vertex_index"
    faces = [np.asarray(f, dtype=np.int64) for f in face[key]]
    if not faces:
        return Topology.TRIANGLE, np.zeros(0, dtype=np.int64)

    sizes = {len(f) for f in faces}
    if sizes == {3}:
        return Topology.TRIANGLE, np.concatenate(faces)
    if sizes == {4}:
        return Topology.QUAD, np.concatenate(faces)
    raise UnsupportedTopologyError(f"mixed polygon sizes {sorted(sizes)}", source)


def parse_mesh(ply: PlyData, source: Path | str | None = None) -> Mesh:
    """Convert parsed PLY elements into a :class:`Mesh`.

    ``source`` only labels errors.
    """
    where = source if source is not None else "PLY"
    element_names = {e.name for e in ply.elements}
    if "vertex" not in element_names:
        raise DataError(f"{where}: no vertex element")
    vertex = ply["vertex"]

    float3 = {}
    for attr, names in _ATTRIBUTE_PROPS.items():
        data = _read_float3(vertex, names)
        if data is not None:
            float3[attr] = data
    n = vertex.count

    if "face" in element_names:
        topology, indices = _face_indices(ply["face"], source)
    elif "edge" in element_names:
        edge = ply["edge"]
        topology = Topology.LINE
        indices = np.column_stack([
            edge["vertex1"].astype(np.int64),
            edge["vertex2"].astype(np.int64),
        ]).reshape(-1)
    else:
        topology, indices = Topology.POINT, np.arange(n, dtype=np.int64)

    if len(indices) and (indices.min() < 0 or indices.max() >= n):
        raise DataError(
            f"{where}: {topology.value} index out of range [0, {n}) "
            f"(min {indices.min()}, max {indices.max()})"
        )

    return Mesh(topology, indices, float3)


def read_mesh(path: Path) -> Mesh:
    """Read a PLY file. OSError propagates unchanged.

    Raises:
        DataError: the file is not a parseable PLY or its indices are invalid.
        UnsupportedTopologyError: faces mix polygon sizes.
    """
    path = Path(path)
    with open(path, "rb") as f:
        try:
            ply = PlyData.read(f)
        except PlyParseError as exc:
            raise DataError(f"{path}: not a valid PLY file: {exc}") from exc
    mesh = parse_mesh(ply, source=path)
    logger.info(
        f"Loaded {mesh.topology.value} mesh from {path.name}: "
        f"{mesh.vertex_count} vertices, {mesh.primitive_count} primitives"
    )
    return mesh


def _vertex_element(mesh: Mesh) -> PlyElement:
    fields = []
    for attr, names in _ATTRIBUTE_PROPS.items():
        if mesh.has_attribute(attr):
            fields.extend((n, "f4") for n in names)

    data = np.empty(mesh.vertex_count, dtype=fields)
    for attr, names in _ATTRIBUTE_PROPS.items():
        if mesh.has_attribute(attr):
            values = mesh.float3[attr]
            for i, n in enumerate(names):
                data[n] = values[:, i]
    return PlyElement.describe(data, "vertex")


def to_ply_bytes(mesh: Mesh) -> bytes:
    """Serialize ``mesh`` as binary little-endian PLY.

    Raises:
        EncodingError: if the mesh cannot be represented as PLY.
    """
    try:
        elements = [_vertex_element(mesh)]
        if mesh.topology is Topology.TRIANGLE:
            faces = np.empty(mesh.primitive_count, dtype=[("vertex_indices", "i4", (3,))])
            faces["vertex_indices"] = mesh.indices.reshape(-1, 3)
            elements.append(PlyElement.describe(faces, "face"))
        elif mesh.topology is not Topology.POINT:
            raise ValueError(f"PLY writer does not support {mesh.topology.value} topology")

        buf = io.BytesIO()
        PlyData(elements, text=False, byte_order="<").write(buf)
    except (ValueError, TypeError) as exc:
        raise EncodingError(f"Failed to encode {mesh.topology.value} mesh as PLY: {exc}") from exc
    return buf.getvalue()


def from_ply_bytes(data: bytes) -> Mesh:
    return parse_mesh(PlyData.read(io.BytesIO(data)))
