"""Mesh model and PLY codec."""

from .model import COLOR, NORMAL, POSITION, Mesh, Topology
from .ply import from_ply_bytes, read_mesh, to_ply_bytes

__all__ = [
    "COLOR",
    "NORMAL",
    "POSITION",
    "Mesh",
    "Topology",
    "from_ply_bytes",
    "read_mesh",
    "to_ply_bytes",
]
