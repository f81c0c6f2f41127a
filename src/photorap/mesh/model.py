"""Minimal immutable mesh: topology, indices and float3 vertex attributes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np

POSITION = "position"
COLOR = "color"
NORMAL = "normal"


class Topology(enum.Enum):
    POINT = "point"
    LINE = "line"
    TRIANGLE = "triangle"
    QUAD = "quad"

    @property
    def indices_per_primitive(self) -> int:
        return {"point": 1, "line": 2, "triangle": 3, "quad": 4}[self.value]


@dataclass(frozen=True, eq=False)
class Mesh:
    """Indexed primitive list over per-vertex float3 attributes.

    ``indices`` is flat; every ``topology.indices_per_primitive`` entries form
    one primitive. Operations return new meshes.
    """

    topology: Topology
    indices: np.ndarray  # (K,) int64
    float3: dict[str, np.ndarray] = field(default_factory=dict)  # name -> (N, 3) float64

    def __post_init__(self) -> None:
        if len(self.indices) % self.topology.indices_per_primitive != 0:
            raise ValueError(
                f"{len(self.indices)} indices do not form whole {self.topology.value} primitives"
            )
        counts = {len(v) for v in self.float3.values()}
        if len(counts) > 1:
            raise ValueError(f"Vertex attributes have mismatched lengths: {sorted(counts)}")

    @classmethod
    def point_cloud(cls, attributes: dict[str, np.ndarray]) -> Mesh:
        float3 = {k: np.asarray(v, dtype=np.float64).reshape(-1, 3) for k, v in attributes.items()}
        n = len(next(iter(float3.values()))) if float3 else 0
        return cls(Topology.POINT, np.arange(n, dtype=np.int64), float3)

    @property
    def vertex_count(self) -> int:
        if not self.float3:
            return 0
        return len(next(iter(self.float3.values())))

    @property
    def primitive_count(self) -> int:
        return len(self.indices) // self.topology.indices_per_primitive

    def has_attribute(self, name: str) -> bool:
        return name in self.float3

    def with_attributes(self, *names: str) -> Mesh:
        """Keep only the named float3 attributes that are present."""
        return Mesh(self.topology, self.indices, {k: v for k, v in self.float3.items() if k in names})

    def scale(self, origin, amount) -> Mesh:
        """Scale positions about ``origin`` by the per-axis factors ``amount``."""
        origin = np.asarray(origin, dtype=np.float64)
        amount = np.asarray(amount, dtype=np.float64)
        float3 = dict(self.float3)
        if POSITION in float3:
            float3[POSITION] = (float3[POSITION] - origin) * amount + origin
        return Mesh(self.topology, self.indices, float3)

    def flip_tri_winding(self) -> Mesh:
        """Reverse every triangle's winding (a, b, c) -> (a, c, b)."""
        if self.topology is not Topology.TRIANGLE:
            raise ValueError(f"Cannot flip winding of {self.topology.value} topology")
        tris = self.indices.reshape(-1, 3)[:, [0, 2, 1]]
        return Mesh(self.topology, tris.reshape(-1).copy(), self.float3)
