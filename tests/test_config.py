"""Tests for configuration loading and validation."""

import json
import pytest
from gravity_sim.errors import ConfigurationError
from gravity_sim.utils.config import SimulationConfig, load_config, save_config


def test_defaults():
    """Test default configuration values."""
    config = SimulationConfig()
    assert config.time_step == 0.016
    assert config.time_scale == 1.0
    assert config.gravitational_constant == 6.67430e-11
    assert config.integration_method == "verlet"
    assert config.collisions_enabled and config.orbital_paths_enabled and config.pin_stars
    assert config.stabilize_interval == 0


def test_effective_time_step():
    """Test dt combines time step and time scale."""
    config = SimulationConfig(time_step=0.5, time_scale=86400.0)
    assert config.dt == pytest.approx(43200.0)


@pytest.mark.parametrize("field, value", [
    ("time_step", 0.0),
    ("time_step", float("nan")),
    ("time_scale", -1.0),
    ("gravitational_constant", 0.0),
    ("stabilize_interval", -5),
])
def test_validate_rejects_bad_values(field, value):
    """Test out-of-range values are rejected."""
    with pytest.raises(ConfigurationError):
        SimulationConfig(**{field: value}).validate()


def test_with_changes():
    """Test copying a config with changes."""
    config = SimulationConfig()
    changed = config.with_changes(integration_method="rk4", time_scale=10.0)
    assert changed.integration_method == "rk4"
    assert changed.time_scale == 10.0
    assert config.integration_method == "verlet"
    
    with pytest.raises(ConfigurationError):
        config.with_changes(warp_factor=9)


def test_from_dict_rejects_unknown_keys():
    """Test unknown config keys are rejected."""
    with pytest.raises(ConfigurationError):
        SimulationConfig.from_dict({"time_step": 1.0, "theta": 0.5})


def test_json_round_trip(tmp_path):
    """Test saving and loading JSON config."""
    config = SimulationConfig(time_step=3600.0, integration_method="rk4", stabilize_interval=10)
    path = tmp_path / "config.json"
    save_config(config, str(path))
    
    assert json.loads(path.read_text())["integration_method"] == "rk4"
    assert load_config(str(path)) == config


def test_yaml_round_trip(tmp_path):
    """Test saving and loading YAML config."""
    config = SimulationConfig(time_scale=100.0, collisions_enabled=False)
    path = tmp_path / "config.yaml"
    save_config(config, str(path))
    assert load_config(str(path)) == config


def test_partial_yaml_uses_defaults(tmp_path):
    """Test partial YAML config falls back to defaults."""
    path = tmp_path / "partial.yml"
    path.write_text("integration_method: euler\n")
    config = load_config(str(path))
    assert config.integration_method == "euler"
    assert config.time_step == 0.016
