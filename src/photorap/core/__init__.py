"""photorap core: reconstruction contracts, base step, errors, logging."""

from .step_base import BaseStep
from .contracts import (
    CameraSchema,
    PointSchema,
    ReconstructionSchema,
    ShotSchema,
    load_reconstruction,
    parse_reconstruction_document,
)
from .config import load_step_config
from .errors import (
    DataError,
    EncodingError,
    InputError,
    PhotorapError,
    ShotIndexError,
    UnsupportedTopologyError,
)
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "CameraSchema",
    "PointSchema",
    "ReconstructionSchema",
    "ShotSchema",
    "load_reconstruction",
    "parse_reconstruction_document",
    "load_step_config",
    "DataError",
    "EncodingError",
    "InputError",
    "PhotorapError",
    "ShotIndexError",
    "UnsupportedTopologyError",
    "setup_logging",
]
