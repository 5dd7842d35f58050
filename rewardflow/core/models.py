"""Pydantic data models for the distribution tool.

All data structures are immutable (frozen) after creation. Holders and run
parameters are passed explicitly through the pipeline; nothing is mutated
in place.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .types import EligibilityStatus, Fraction, Hours, Percentage, RewardAmount, TokenAmount

HOURS_PER_DAY = 24.0


class Holder(BaseModel):
    """A token holder as supplied by the caller.

    The run thresholds and reference time are copied onto every holder so
    that each record can be evaluated on its own.
    """

    address: str
    tokens: TokenAmount
    hours_after_launch: Hours  # Hour of the first purchase, relative to launch
    min_balance: TokenAmount
    max_balance: TokenAmount
    hours_since_launch: Hours  # Reference "now", identical for every holder in a run

    model_config = {"frozen": True}

    @property
    def hours_held(self) -> Hours:
        """Hours between the first purchase and the reference time."""
        return self.hours_since_launch - self.hours_after_launch


class WeightResult(BaseModel):
    """Weight breakdown for a single holder."""

    balance_weight: float = 0.0
    early_bonus: float = 0.0
    tenure_bonus: float = 0.0
    time_weight: float = 0.0
    total_weight: float = 0.0
    hours_held: Hours = 0.0
    qualified: bool = False

    model_config = {"frozen": True}

    @property
    def days_held(self) -> float:
        return self.hours_held / HOURS_PER_DAY


class HolderEvaluation(BaseModel):
    """Eligibility outcome of a holder, with its weight breakdown."""

    address: str
    tokens: TokenAmount
    weight: WeightResult
    status: EligibilityStatus

    model_config = {"frozen": True}

    @property
    def is_eligible(self) -> bool:
        """Check if the holder takes part in the distribution."""
        return self.status == EligibilityStatus.ELIGIBLE


class AllocationResult(BaseModel):
    """Reward allocated to an eligible holder."""

    address: str
    tokens: TokenAmount
    weight: WeightResult
    share: Fraction
    amount: RewardAmount
    share_percentage: Percentage

    model_config = {"frozen": True}


class DistributionStats(BaseModel):
    """Summary metrics for a distribution run.

    Averages and extremes are None when no allocation was produced.
    """

    total_holders: int
    valid_holders: int  # Holders meeting the min balance alone
    total_tokens: TokenAmount  # Summed over the min-balance subset
    total_weightage: float
    total_distributed: RewardAmount
    average_weight: float | None = None
    average_reward: RewardAmount | None = None
    top_weight: AllocationResult | None = None
    top_reward: AllocationResult | None = None
    bottom_weight: AllocationResult | None = None
    bottom_reward: AllocationResult | None = None

    model_config = {"frozen": True}


class DistributionReport(BaseModel):
    """Complete result of a distribution run."""

    # Run parameters
    treasury_balance: RewardAmount
    fee_reserve: Fraction
    fee_amount: RewardAmount
    available_for_distribution: RewardAmount
    min_balance: TokenAmount
    max_balance: TokenAmount
    hours_since_launch: Hours

    # Results
    evaluations: list[HolderEvaluation] = Field(default_factory=list)
    allocations: list[AllocationResult] = Field(default_factory=list)
    stats: DistributionStats

    # Metadata
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    tool_version: str = "0.1.0"

    model_config = {"frozen": True}

    @property
    def eligible_count(self) -> int:
        return sum(1 for evaluation in self.evaluations if evaluation.is_eligible)

    @property
    def filtered_out_count(self) -> int:
        return len(self.evaluations) - self.eligible_count

    @property
    def is_empty(self) -> bool:
        """Check if nothing was distributed."""
        return not self.allocations
