"""Configuration and logging utilities."""

from gravity_sim.utils.config import SimulationConfig, load_config, save_config
from gravity_sim.utils.log import configure_logging

__all__ = ["SimulationConfig", "load_config", "save_config", "configure_logging"]
