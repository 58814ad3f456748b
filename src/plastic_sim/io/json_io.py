# MIT License (see LICENSE)
"""
JSON serialization of simulation configuration.

Only the configuration is stored; particle and constraint state is never
persisted. A saved file rebuilds the same initial body.

JSON Schema Overview:
---------------------
{
  "dimension": 2 | 3,                 # Default: 3
  "gravity": float,                   # Per-step displacement, default 0.01
  "up_axis": int,                     # Default: 1 (y)
  "damping": float,                   # (0, 1], default 0.99
  "restitution": float,               # [0, 1], default 0.5
  "floor": float,                     # Default: 0.0
  "bounds_min": [float|null, ...],    # Optional lateral lower limits
  "bounds_max": [float|null, ...],    # Optional upper limits (walls/ceiling)
  "particle_radius": float,           # Default: 0.1
  "relaxation_passes": int,           # Default: 5
  "chassis_stiffness": float,         # (0, 1], default 0.9
  "spoke_stiffness": float,           # (0, 1], default 0.3
  "plasticity": {
    "yield_threshold": float,         # >= 0, default 0.05
    "plasticity_factor": float        # [0, 1], default 0.5
  },
  "half_extents": [float, ...],       # One per axis
  "center": [float, ...],             # One per axis
  "reference_dt": float,              # Seconds, default 1/60
  "collide_particles": bool           # Default: true
}

Every key is optional. Unknown keys are rejected so typos do not
silently fall back to defaults.
"""
from __future__ import annotations
import json
import logging
from typing import Any

from ..config import SimConfig

logger = logging.getLogger(__name__)


def config_to_json(config: SimConfig) -> dict[str, Any]:
    """Convert a config into a JSON-serializable dict."""
    return config.to_dict()


def config_from_json(data: dict[str, Any]) -> SimConfig:
    """
    Build a config from parsed JSON.

    Raises:
        TypeError: If data is not a JSON object.
        ValueError: On unknown option names or invalid values.
    """
    if not isinstance(data, dict):
        raise TypeError(f"Configuration must be a JSON object, got {type(data).__name__}")
    return SimConfig.from_dict(data)


def load_config_raw(path: str) -> dict[str, Any]:
    """Load the raw JSON object from a config file without validation."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_config(path: str) -> SimConfig:
    """
    Load and validate a SimConfig from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: On unknown option names or invalid values.
    """
    logger.info("Loading configuration from %s", path)
    return config_from_json(load_config_raw(path))


def save_config(config: SimConfig, path: str, indent: int = 2) -> None:
    """Write a SimConfig to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_to_json(config), f, indent=indent)
    logger.info("Saved configuration to %s", path)
