"""
Tests for Configuration Loading
===============================

YAML loading and validation of the analysis section.
"""

import pytest
import yaml

from core.config import AnalyzerConfig, ConfigError, IVSolverConfig, load_config


class TestAnalyzerConfig:
    """Test AnalyzerConfig construction and validation."""

    def test_defaults(self):
        config = AnalyzerConfig()
        assert config.default_volatility == 0.30
        assert config.edge_threshold == 0.10
        assert config.min_time_to_expiry == 0.02
        assert config.contract_multiplier == 100
        assert config.max_targets == 3
        assert config.iv_solver == IVSolverConfig()
        assert config.iv_solver.max_iterations == 100
        assert config.iv_solver.tolerance == 1e-6

    def test_from_empty_section(self):
        assert AnalyzerConfig.from_dict(None) == AnalyzerConfig()
        assert AnalyzerConfig.from_dict({}) == AnalyzerConfig()

    def test_from_dict(self, test_config):
        config = AnalyzerConfig.from_dict(test_config["analysis"])
        assert config.default_volatility == 0.25
        assert config.edge_threshold == 0.05
        assert config.min_time_to_expiry == 0.01
        assert config.iv_solver.max_iterations == 50
        assert config.iv_solver.tolerance == 1e-7
        # Untouched keys keep defaults
        assert config.iv_solver.max_volatility == 5.0
        assert config.contract_multiplier == 100

    def test_from_dict_does_not_mutate_input(self, test_config):
        section = test_config["analysis"]
        AnalyzerConfig.from_dict(section)
        assert "iv_solver" in section

    def test_unknown_keys_ignored(self):
        config = AnalyzerConfig.from_dict({"edge_threshold": 0.2, "colour": "blue"})
        assert config.edge_threshold == 0.2

    @pytest.mark.parametrize("section", [
        {"default_volatility": 0},
        {"edge_threshold": -0.1},
        {"min_time_to_expiry": -1},
        {"contract_multiplier": 0},
        {"max_targets": 0},
        {"iv_solver": {"max_iterations": 0}},
        {"iv_solver": {"tolerance": 0}},
        {"iv_solver": {"min_volatility": 2.0, "max_volatility": 1.0}},
        {"iv_solver": {"initial_guess": 9.0}},
    ])
    def test_invalid_values_raise(self, section):
        with pytest.raises(ConfigError):
            AnalyzerConfig.from_dict(section)

    @pytest.mark.parametrize("section", [
        {"edge_threshold": "10%"},
        {"default_volatility": "0.3"},
        {"iv_solver": {"tolerance": "tight"}},
        {"iv_solver": "fast"},
    ])
    def test_wrong_types_raise_config_error(self, section):
        with pytest.raises(ConfigError):
            AnalyzerConfig.from_dict(section)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            AnalyzerConfig.from_dict({"edge_threshold": 0})

    def test_to_dict(self):
        data = AnalyzerConfig().to_dict()
        assert data["iv_solver"]["initial_guess"] == 0.30
        assert data["edge_threshold"] == 0.10


class TestLoadConfig:
    """Test YAML file loading."""

    def test_load_yaml(self, tmp_path, test_config):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(test_config), encoding="utf-8")

        loaded = load_config(path)
        assert loaded == test_config
        assert AnalyzerConfig.from_dict(loaded["analysis"]).edge_threshold == 0.05

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == {}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("analysis: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_shipped_config_is_valid(self):
        from pathlib import Path

        path = Path(__file__).resolve().parent.parent / "config.yaml"
        config = AnalyzerConfig.from_dict(load_config(path)["analysis"])
        assert config == AnalyzerConfig()
