"""Tests for run configuration."""

import math

import pytest

from rewardflow.core import config as config_module
from rewardflow.core.config import DistributionConfig, get_config, reload_config
from rewardflow.core.exceptions import ConfigurationError


class TestDistributionConfig:
    """Tests for DistributionConfig defaults and validation."""

    def test_defaults(self, default_config):
        """Test default run parameters."""
        assert default_config.min_balance == 20_000
        assert default_config.max_balance == 100_000_000
        assert default_config.treasury_balance == 10.0
        assert default_config.fee_reserve == 0.05
        assert default_config.hours_since_launch == 48
        default_config.validate()

    @pytest.mark.parametrize(
        "overrides,key",
        [
            ({"min_balance": 0}, "min_balance"),
            ({"min_balance": -100}, "min_balance"),
            ({"max_balance": 10_000}, "max_balance"),
            ({"treasury_balance": -0.1}, "treasury_balance"),
            ({"fee_reserve": 1.0}, "fee_reserve"),
            ({"fee_reserve": -0.05}, "fee_reserve"),
            ({"hours_since_launch": -1}, "hours_since_launch"),
            ({"treasury_balance": math.nan}, "treasury_balance"),
        ],
    )
    def test_validate_rejects(self, default_config, overrides, key):
        """Test each invariant is enforced with the offending key."""
        with pytest.raises(ConfigurationError) as exc_info:
            default_config.with_overrides(**overrides).validate()
        assert exc_info.value.config_key == key

    def test_with_overrides_ignores_none(self, default_config):
        """Test that None values leave settings untouched."""
        updated = default_config.with_overrides(treasury_balance=25.0, fee_reserve=None)

        assert updated.treasury_balance == 25.0
        assert updated.fee_reserve == 0.05
        assert default_config.treasury_balance == 10.0

    def test_make_holder_copies_thresholds(self, default_config):
        """Test that holders carry the run thresholds."""
        holder = default_config.make_holder("wallet", 42_000, 6)

        assert holder.min_balance == default_config.min_balance
        assert holder.max_balance == default_config.max_balance
        assert holder.hours_since_launch == default_config.hours_since_launch
        assert holder.hours_held == 42

    def test_frozen(self, default_config):
        """Test the config cannot be mutated."""
        with pytest.raises(AttributeError):
            default_config.min_balance = 1


class TestConfigLoading:
    """Tests for loading configuration from files and environment."""

    def test_from_file_top_level(self, tmp_path):
        """Test YAML with settings at top level."""
        path = tmp_path / "run.yaml"
        path.write_text("min_balance: 1000\ntreasury_balance: 50\n")

        config = DistributionConfig.from_file(path)

        assert config.min_balance == 1000
        assert config.treasury_balance == 50
        assert config.fee_reserve == 0.05

    def test_from_file_section(self, tmp_path):
        """Test YAML with a distribution section."""
        path = tmp_path / "run.yaml"
        path.write_text("distribution:\n  fee_reserve: 0.1\n  hours_since_launch: 72\n")

        config = DistributionConfig.from_file(path)

        assert config.fee_reserve == 0.1
        assert config.hours_since_launch == 72

    def test_from_file_unknown_key(self, tmp_path):
        """Test that typos in the config file are reported."""
        path = tmp_path / "run.yaml"
        path.write_text("min_balanse: 1000\n")

        with pytest.raises(ConfigurationError) as exc_info:
            DistributionConfig.from_file(path)
        assert exc_info.value.config_key == "min_balanse"

    def test_from_file_not_a_number(self, tmp_path):
        """Test that non-numeric values are rejected."""
        path = tmp_path / "run.yaml"
        path.write_text("treasury_balance: lots\n")

        with pytest.raises(ConfigurationError):
            DistributionConfig.from_file(path)

    def test_from_file_invalid_yaml(self, tmp_path):
        """Test that malformed YAML is reported."""
        path = tmp_path / "run.yaml"
        path.write_text("min_balance: [1000\n")

        with pytest.raises(ConfigurationError):
            DistributionConfig.from_file(path)

    def test_from_file_missing(self, tmp_path):
        """Test a missing config file."""
        with pytest.raises(ConfigurationError):
            DistributionConfig.from_file(tmp_path / "missing.yaml")

    def test_env_overrides(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("REWARDFLOW_TREASURY_BALANCE", "25")
        monkeypatch.setenv("REWARDFLOW_FEE_RESERVE", "0.1")

        config = DistributionConfig.from_env()

        assert config.treasury_balance == 25.0
        assert config.fee_reserve == 0.1
        assert config.min_balance == 20_000

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables take precedence over the file."""
        path = tmp_path / "run.yaml"
        path.write_text("treasury_balance: 50\n")
        monkeypatch.setenv("REWARDFLOW_TREASURY_BALANCE", "75")

        assert DistributionConfig.load(path).treasury_balance == 75.0

    def test_env_invalid_value(self, monkeypatch):
        """Test that an unparsable environment value is a configuration error."""
        monkeypatch.setenv("REWARDFLOW_MIN_BALANCE", "twenty thousand")

        with pytest.raises(ConfigurationError) as exc_info:
            DistributionConfig.from_env()
        assert exc_info.value.config_key == "REWARDFLOW_MIN_BALANCE"

    def test_load_validates(self, tmp_path):
        """Test that load() rejects an invalid combination."""
        path = tmp_path / "run.yaml"
        path.write_text("min_balance: 5000\nmax_balance: 1000\n")

        with pytest.raises(ConfigurationError):
            DistributionConfig.load(path)

    def test_load_applies_overrides_before_validation(self, tmp_path):
        """Test an override can repair an invalid file value."""
        path = tmp_path / "run.yaml"
        path.write_text("fee_reserve: 1.0\n")

        config = DistributionConfig.load(path, fee_reserve=0.05, treasury_balance=None)

        assert config.fee_reserve == 0.05
        assert config.treasury_balance == 10.0

    def test_load_overrides_beat_environment(self, monkeypatch):
        """Test explicit overrides take precedence over environment variables."""
        monkeypatch.setenv("REWARDFLOW_TREASURY_BALANCE", "25")

        assert DistributionConfig.load(treasury_balance=30).treasury_balance == 30

    def test_resolve_does_not_validate(self):
        """Test resolve() returns the merged values as they are."""
        config = DistributionConfig.resolve(min_balance=5e8)

        assert config.min_balance == 5e8
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_global_config(self, monkeypatch, tmp_path):
        """Test lazy global config and reload."""
        monkeypatch.setattr(config_module, "_config", None)
        assert get_config() == DistributionConfig()

        path = tmp_path / "run.yaml"
        path.write_text("treasury_balance: 3\n")
        assert reload_config(path).treasury_balance == 3
        assert get_config().treasury_balance == 3
