# MIT License (see LICENSE)
"""
Input/output for simulation configuration.

This subpackage provides:
    - load_config: Read and validate a SimConfig from JSON.
    - save_config: Write a SimConfig to JSON.
    - config_to_json / config_from_json: Dict conversion.

Typical usage:
    from plastic_sim.io import load_config
    from plastic_sim import Simulation

    sim = Simulation(config=load_config("chassis.json"))
"""
from .json_io import (
    load_config,
    load_config_raw,
    save_config,
    config_to_json,
    config_from_json,
)

__all__ = [
    "load_config",
    "load_config_raw",
    "save_config",
    "config_to_json",
    "config_from_json",
]
