"""Configuration management."""

import json
import math
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Any, Dict

import yaml

from gravity_sim.errors import ConfigurationError
from gravity_sim.physics.constants import FRAME_TIME_STEP, GRAVITATIONAL_CONSTANT


@dataclass(frozen=True)
class SimulationConfig:
    """Simulation configuration.
    
    Immutable: the simulator swaps in a new instance between ticks
    (see ``Simulator.configure``).
    """
    # Time stepping
    time_step: float = FRAME_TIME_STEP
    time_scale: float = 1.0
    
    # Physics
    gravitational_constant: float = GRAVITATIONAL_CONSTANT
    integration_method: str = "verlet"
    pin_stars: bool = True
    
    # Per-tick toggles
    collisions_enabled: bool = True
    orbital_paths_enabled: bool = True
    
    # Drift correction (0 disables)
    stabilize_interval: int = 0
    enforce_safe_distances: bool = False
    
    # Debug energy log every N ticks (0 disables)
    diagnostics_interval: int = 0
    
    @property
    def dt(self) -> float:
        """Effective time step: base step times time scale."""
        return self.time_step * self.time_scale
    
    def validate(self) -> "SimulationConfig":
        """Check value ranges.
        
        Raises:
            ConfigurationError: If a value is out of range
        """
        if not (math.isfinite(self.gravitational_constant) and self.gravitational_constant > 0):
            raise ConfigurationError(f"gravitational_constant must be positive, got {self.gravitational_constant}")
        if not (math.isfinite(self.time_step) and self.time_step > 0):
            raise ConfigurationError(f"time_step must be positive, got {self.time_step}")
        if not (math.isfinite(self.time_scale) and self.time_scale >= 0):
            raise ConfigurationError(f"time_scale must be non-negative, got {self.time_scale}")
        for name in ("stabilize_interval", "diagnostics_interval"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {getattr(self, name)}")
        return self
    
    def with_changes(self, **changes) -> "SimulationConfig":
        """Return a validated copy with some fields replaced."""
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationError(f"Unknown config field(s): {sorted(unknown)}")
        return replace(self, **changes).validate()
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        unknown = set(data) - {f.name for f in fields(cls)}
        if unknown:
            raise ConfigurationError(f"Unknown config field(s): {sorted(unknown)}")
        return cls(**data).validate()


def load_config(config_path: str) -> SimulationConfig:
    """Load configuration from file.
    
    Args:
        config_path: Path to config file (.json or .yaml)
        
    Returns:
        SimulationConfig object
    """
    config_path = Path(config_path)
    
    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    
    return SimulationConfig.from_dict(data or {})


def save_config(config: SimulationConfig, output_path: str):
    """Save configuration to file.
    
    Args:
        config: SimulationConfig object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = config.to_dict()
    
    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
