"""Tests for reconstruction contracts, config loading and errors."""

import json
from pathlib import Path

import pytest
import yaml

from photorap.core.config import load_step_config
from photorap.core.contracts import (
    ReconstructionSchema,
    ShotSchema,
    load_reconstruction,
    parse_reconstruction_document,
)
from photorap.core.errors import DataError, InputError, ShotIndexError, UnsupportedTopologyError
from photorap.steps.s01_opensfm_convert.config import OpenSfmConvertConfig


class TestReconstructionDocument:
    def test_parse_single_reconstruction(self, sample_reconstruction):
        recon = parse_reconstruction_document(json.dumps([sample_reconstruction]))
        assert list(recon.cameras) == ["A", "B"]
        assert list(recon.shots) == ["frame_0003.jpg", "frame_0001.jpg", "frame_0002.jpg"]
        assert len(recon.points) == 3
        assert recon.cameras["B"].width == 640
        assert recon.shots["frame_0003.jpg"].orientation == 6

    def test_shot_defaults(self):
        shot = ShotSchema(camera="A", rotation=[0, 0, 0], translation=[0, 0, 0])
        assert shot.capture_time == 0.0
        assert shot.orientation == 1
        assert shot.scale == 1.0

    def test_empty_sections_default(self):
        recon = ReconstructionSchema()
        assert recon.cameras == {} and recon.shots == {} and recon.points == {}

    def test_multiple_reconstructions_rejected(self, sample_reconstruction):
        raw = json.dumps([sample_reconstruction, sample_reconstruction])
        with pytest.raises(InputError, match="2 reconstructions"):
            parse_reconstruction_document(raw, source="two.json")

    def test_no_reconstruction_rejected(self):
        with pytest.raises(InputError, match="no reconstruction"):
            parse_reconstruction_document("[]")

    def test_malformed_json(self):
        with pytest.raises(InputError, match="malformed"):
            parse_reconstruction_document("[{")

    def test_not_a_list(self, sample_reconstruction):
        with pytest.raises(InputError, match="expected a list"):
            parse_reconstruction_document(json.dumps(sample_reconstruction))

    def test_schema_violation(self):
        bad = [{"shots": {"s1": {"camera": "A", "rotation": [0, 0], "translation": [0, 0, 0]}}}]
        with pytest.raises(InputError, match="invalid reconstruction"):
            parse_reconstruction_document(json.dumps(bad))

    def test_load_reconstruction_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_reconstruction(tmp_path / "missing.json")

    def test_load_reconstruction_error_names_file(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("not json")
        with pytest.raises(InputError, match="broken.json"):
            load_reconstruction(path)


class TestErrors:
    def test_shot_index_error_carries_id(self):
        err = ShotIndexError("frame")
        assert isinstance(err, DataError)
        assert err.shot_id == "frame"
        assert "frame" in str(err)

    def test_unsupported_topology_message(self):
        err = UnsupportedTopologyError("line", "lines.ply")
        assert err.topology == "line"
        assert "line" in str(err) and "lines.ply" in str(err)


class TestConfig:
    def test_defaults(self):
        cfg = OpenSfmConvertConfig()
        assert cfg.mesh_scale == [1.0, -1.0, 1.0]
        assert cfg.include_pointcloud is True
        assert cfg.pointcloud_name == "points.ply"

    def test_load_step_config(self, tmp_path: Path):
        path = tmp_path / "convert.yaml"
        with open(path, "w") as f:
            yaml.dump({"mesh_scale": [2.0, 2.0, 2.0], "pointcloud_name": "sparse.ply"}, f)
        cfg = load_step_config(path, OpenSfmConvertConfig)
        assert cfg.mesh_scale == [2.0, 2.0, 2.0]
        assert cfg.pointcloud_name == "sparse.ply"

    def test_empty_config_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        cfg = load_step_config(path, OpenSfmConvertConfig)
        assert cfg == OpenSfmConvertConfig()

    def test_invalid_values_raise_input_error(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("mesh_scale: [1, 2]\n")
        with pytest.raises(InputError, match="bad.yaml"):
            load_step_config(path, OpenSfmConvertConfig)

    def test_malformed_yaml_raises_input_error(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("mesh_scale: [1, 2\n")
        with pytest.raises(InputError, match="malformed"):
            load_step_config(path, OpenSfmConvertConfig)

    def test_non_mapping_yaml(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InputError, match="expected a mapping"):
            load_step_config(path, OpenSfmConvertConfig)

    def test_bundled_config_matches_defaults(self):
        path = Path(__file__).resolve().parents[2] / "configs" / "opensfm_convert.yaml"
        assert load_step_config(path, OpenSfmConvertConfig) == OpenSfmConvertConfig()
