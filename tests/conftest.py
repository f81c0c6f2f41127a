"""Shared pytest fixtures for photorap tests."""

import json
from pathlib import Path

import numpy as np
import pytest
from plyfile import PlyData, PlyElement


def make_camera(width: int = 1920, height: int = 1080, focal: float = 0.85) -> dict:
    return {
        "projection_type": "perspective",
        "width": width,
        "height": height,
        "focal": focal,
        "k1": -0.05,
        "k2": 0.01,
    }


def make_shot(camera: str, *, capture_time: float = 0.0, rotation=(0.0, 0.0, 0.0),
              translation=(0.0, 0.0, 0.0), orientation: int = 1, scale: float = 1.0) -> dict:
    return {
        "camera": camera,
        "rotation": list(rotation),
        "translation": list(translation),
        "capture_time": capture_time,
        "orientation": orientation,
        "scale": scale,
        "gps_dop": 999999.0,
    }


def write_reconstruction(path: Path, reconstructions: list[dict]) -> Path:
    with open(path, "w") as f:
        json.dump(reconstructions, f)
    return path


def write_ply(path: Path, vertex: np.ndarray, *, faces: np.ndarray | None = None,
              edges: np.ndarray | None = None) -> Path:
    elements = [PlyElement.describe(vertex, "vertex")]
    if faces is not None:
        elements.append(PlyElement.describe(faces, "face"))
    if edges is not None:
        elements.append(PlyElement.describe(edges, "edge"))
    PlyData(elements, text=False).write(str(path))
    return path


@pytest.fixture
def sample_reconstruction() -> dict:
    """Two cameras, three untimed shots (two on A, one on B), three points."""
    return {
        "cameras": {"A": make_camera(), "B": make_camera(640, 480, 1.1)},
        "shots": {
            "frame_0003.jpg": make_shot("A", rotation=(0.5, -1.25, 2.5), translation=(3.0, 1.0, -2.0),
                                        orientation=6, scale=1.5),
            "frame_0001.jpg": make_shot("A", rotation=(0.0, 0.25, -0.5), translation=(1.0, 2.0, 3.0)),
            "frame_0002.jpg": make_shot("B", translation=(0.5, 0.5, 0.5)),
        },
        "points": {
            "1": {"coordinates": [1.0, 2.0, 3.0], "color": [255, 0, 127.5]},
            "2": {"coordinates": [-1.0, 0.5, 0.0], "color": [10, 20, 30]},
            "3": {"coordinates": [0.0, -4.0, 2.0], "color": [0, 255, 255]},
        },
        "reference_lla": {"latitude": 0.0, "longitude": 0.0, "altitude": 0.0},
    }


@pytest.fixture
def reconstruction_file(tmp_path: Path, sample_reconstruction: dict) -> Path:
    return write_reconstruction(tmp_path / "reconstruction.json", [sample_reconstruction])


@pytest.fixture
def triangle_ply(tmp_path: Path) -> Path:
    """Unit quad split into two triangles, with normals and uchar colors."""
    vertex = np.array(
        [
            (0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 255, 0, 0),
            (1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0, 255, 0),
            (1.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0, 0, 255),
            (0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 255, 255, 255),
        ],
        dtype=[("x", "f4"), ("y", "f4"), ("z", "f4"),
               ("nx", "f4"), ("ny", "f4"), ("nz", "f4"),
               ("red", "u1"), ("green", "u1"), ("blue", "u1")],
    )
    faces = np.array([([0, 1, 2],), ([0, 2, 3],)], dtype=[("vertex_indices", "i4", (3,))])
    return write_ply(tmp_path / "mesh.ply", vertex, faces=faces)


@pytest.fixture
def point_ply(tmp_path: Path) -> Path:
    vertex = np.array(
        [(1.0, 2.0, 3.0, 255, 128, 0), (-1.0, -2.0, -3.0, 0, 0, 0), (0.5, 0.5, 0.5, 51, 51, 51)],
        dtype=[("x", "f4"), ("y", "f4"), ("z", "f4"),
               ("red", "u1"), ("green", "u1"), ("blue", "u1")],
    )
    return write_ply(tmp_path / "dense.ply", vertex)


@pytest.fixture
def line_ply(tmp_path: Path) -> Path:
    vertex = np.array([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0)],
                      dtype=[("x", "f4"), ("y", "f4"), ("z", "f4")])
    edges = np.array([(0, 1), (1, 2)], dtype=[("vertex1", "i4"), ("vertex2", "i4")])
    return write_ply(tmp_path / "lines.ply", vertex, edges=edges)
