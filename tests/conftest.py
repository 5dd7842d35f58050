"""Pytest configuration and fixtures for distribution tool tests."""

import pytest

from rewardflow.core.config import DistributionConfig
from rewardflow.core.models import Holder

ENV_KEYS = (
    "REWARDFLOW_MIN_BALANCE",
    "REWARDFLOW_MAX_BALANCE",
    "REWARDFLOW_TREASURY_BALANCE",
    "REWARDFLOW_FEE_RESERVE",
    "REWARDFLOW_HOURS_SINCE_LAUNCH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep REWARDFLOW_* variables from the shell out of the tests."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def default_config() -> DistributionConfig:
    """Default run configuration: 20K min, 100M max, 10 treasury, 5% fee, 48h."""
    return DistributionConfig()


@pytest.fixture
def make_holder(default_config: DistributionConfig):
    """Factory for holders carrying the default run thresholds."""

    def _make(address: str, tokens: float, hours_after_launch: float = 0.0, **overrides) -> Holder:
        holder = default_config.make_holder(address, tokens, hours_after_launch)
        if overrides:
            holder = holder.model_copy(update=overrides)
        return holder

    return _make


@pytest.fixture
def sample_holders(make_holder) -> list[Holder]:
    """Mixed holders: three eligible, one below min, one above max."""
    return [
        make_holder("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU", 20_000, 0),
        make_holder("9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM", 1_500_000, 6),
        make_holder("HN7cABqLq46Es1jh92dQQisAq662SmxELLLsHHe4YWrH", 250_000, 30),
        make_holder("4Nd1mBQtrMJVYVfKf2PJy9NZUZdTAsp7D4xWLs4gDB4T", 5_000, 0),
        make_holder("2wmVCSfPxGPjrnMMn7rchp4uaeoTqN39mXFC2zhPdri9", 250_000_000, 0),
    ]
