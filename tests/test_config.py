"""
Tests for configuration loading.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from core.config import (
    SimulationConfig, DEFAULT_CONFIG, load_config, save_config, configure_logging
)
from core.errors import ConfigError, ImpactSimError


class TestSimulationConfig:
    """Test config defaults and validation."""

    def test_defaults(self):
        config = SimulationConfig()
        assert config.dt == 10.0
        assert config.max_steps == 100000
        assert config.progress_interval == 500
        assert config.yield_interval == 5000
        assert config.escape_distance_km == 2e6
        assert config.kepler_tolerance == 1e-8
        assert config.kepler_max_iterations == 20
        assert config.default_water_depth == 4000.0

    def test_invalid_values(self):
        with pytest.raises(ConfigError):
            SimulationConfig(dt=0)
        with pytest.raises(ConfigError):
            SimulationConfig(max_steps=0)

    def test_with_overrides(self):
        config = DEFAULT_CONFIG.with_overrides(dt=1.0)
        assert config.dt == 1.0
        assert DEFAULT_CONFIG.dt == 10.0

    def test_config_error_is_package_error(self):
        assert issubclass(ConfigError, ImpactSimError)


class TestLoadConfig:
    """Test YAML loading and saving."""

    def test_no_path_gives_defaults(self):
        assert load_config(None) is DEFAULT_CONFIG

    def test_partial_file(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text("dt: 5.0\nmax_steps: 2000\n")

        config = load_config(str(path))

        assert config.dt == 5.0
        assert config.max_steps == 2000
        assert config.yield_interval == DEFAULT_CONFIG.yield_interval

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text("")
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_unknown_key(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text("time_step: 5.0\n")

        with pytest.raises(ConfigError, match="time_step"):
            load_config(str(path))

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text("dt: [1, 2\n")

        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_save_and_reload(self, tmp_path):
        config = DEFAULT_CONFIG.with_overrides(dt=2.5, log_level="DEBUG")
        path = tmp_path / 'nested' / 'config.yaml'

        save_config(config, str(path))

        assert load_config(str(path)) == config

    def test_unknown_log_level(self):
        with pytest.raises(ConfigError):
            configure_logging("CHATTY")
