"""YAML config loading into Pydantic models."""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .errors import InputError

ConfigT = TypeVar("ConfigT", bound=BaseModel)


def load_step_config(config_path: Path, config_class: type[ConfigT]) -> ConfigT:
    """Load a step-specific YAML config into its Pydantic model.

    An empty file yields the model defaults.

    Raises:
        InputError: malformed YAML, a non-mapping document, or invalid values.
    """
    with open(config_path, encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise InputError(f"{config_path}: malformed config YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise InputError(f"{config_path}: expected a mapping, got {type(raw).__name__}")
    try:
        return config_class(**raw)
    except ValidationError as exc:
        raise InputError(f"{config_path}: invalid config: {exc}") from exc
