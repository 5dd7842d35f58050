"""Core module - data models, types, configuration and exceptions."""

from .models import (
    Holder,
    WeightResult,
    HolderEvaluation,
    AllocationResult,
    DistributionStats,
    DistributionReport,
)
from .types import EligibilityStatus
from .config import DistributionConfig, get_config, reload_config
from .exceptions import (
    RewardFlowError,
    ConfigurationError,
    HolderValidationError,
    DuplicateHolderError,
    HolderFileError,
    DistributionError,
)

__all__ = [
    # Models
    "Holder",
    "WeightResult",
    "HolderEvaluation",
    "AllocationResult",
    "DistributionStats",
    "DistributionReport",
    # Types
    "EligibilityStatus",
    # Config
    "DistributionConfig",
    "get_config",
    "reload_config",
    # Exceptions
    "RewardFlowError",
    "ConfigurationError",
    "HolderValidationError",
    "DuplicateHolderError",
    "HolderFileError",
    "DistributionError",
]
