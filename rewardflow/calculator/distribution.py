"""Distribution engine - splits the treasury among eligible holders.

Reward formula: amount = (holder_weight / Σ eligible weights) × available

where available = treasury - treasury × fee_reserve. A holder is eligible
when it qualifies (balance >= min_balance) and its balance does not exceed
max_balance. Allocations below DUST_THRESHOLD are dropped, so the returned
shares may sum to slightly less than 1.
"""

import logging
import math
from collections.abc import Sequence

from ..core.exceptions import DistributionError
from ..core.models import AllocationResult, Holder, HolderEvaluation, WeightResult
from ..core.types import EligibilityStatus
from .validation import ensure_unique_addresses, validate_holder, validate_pool
from .weights import compute_weight

logger = logging.getLogger(__name__)

DUST_THRESHOLD = 1e-6


def reserve_fees(treasury_total: float, fee_reserve_fraction: float) -> tuple[float, float]:
    """
    Split the treasury into the fee reserve and the distributable amount.

    Args:
        treasury_total: Total reward pool
        fee_reserve_fraction: Fraction withheld for fees, in [0, 1)

    Returns:
        Tuple of (fee_amount, available_for_distribution)
    """
    validate_pool(treasury_total, fee_reserve_fraction)
    fee_amount = treasury_total * fee_reserve_fraction
    return fee_amount, treasury_total - fee_amount


def _weigh(holder: Holder) -> WeightResult:
    return compute_weight(
        holder.tokens,
        holder.hours_after_launch,
        holder.hours_since_launch,
        holder.min_balance,
    )


def _status(holder: Holder, weight: WeightResult) -> EligibilityStatus:
    if not weight.qualified:
        return EligibilityStatus.BELOW_MIN
    if holder.tokens > holder.max_balance:
        return EligibilityStatus.ABOVE_MAX
    return EligibilityStatus.ELIGIBLE


def evaluate_holders(holders: Sequence[Holder]) -> list[HolderEvaluation]:
    """
    Weigh every holder and classify its eligibility.

    Args:
        holders: Holders of one run, each carrying its own thresholds

    Returns:
        One HolderEvaluation per holder, in input order

    Raises:
        ConfigurationError: If a holder carries invalid thresholds
        HolderValidationError: If a holder record is malformed
        DuplicateHolderError: If an address appears twice
    """
    for holder in holders:
        validate_holder(holder)
    ensure_unique_addresses(holders)

    evaluations = []
    for holder in holders:
        weight = _weigh(holder)
        evaluations.append(
            HolderEvaluation(
                address=holder.address,
                tokens=holder.tokens,
                weight=weight,
                status=_status(holder, weight),
            )
        )
    return evaluations


def allocate(
    evaluations: Sequence[HolderEvaluation],
    available: float,
) -> list[AllocationResult]:
    """
    Split the available pool among the eligible evaluations.

    Args:
        evaluations: Output of evaluate_holders for one run
        available: Pool left after the fee reserve

    Returns:
        AllocationResults in input order, dust allocations dropped

    Raises:
        DistributionError: If a weight or the weight sum is not finite
    """
    eligible = [e for e in evaluations if e.is_eligible]
    logger.debug(f"{len(eligible)}/{len(evaluations)} holders eligible for distribution")

    if not eligible:
        return []

    for evaluation in eligible:
        if not math.isfinite(evaluation.weight.total_weight):
            raise DistributionError(
                f"Weight of {evaluation.address} is not finite: {evaluation.weight.total_weight}",
                address=evaluation.address,
            )

    total_weightage = sum(e.weight.total_weight for e in eligible)
    if not math.isfinite(total_weightage) or total_weightage <= 0:
        raise DistributionError(f"Total weight is not a positive finite number: {total_weightage}")

    results = []
    for evaluation in eligible:
        share = evaluation.weight.total_weight / total_weightage
        amount = available * share
        if amount < DUST_THRESHOLD:
            logger.debug(f"Dropping dust allocation for {evaluation.address}: {amount:.3e}")
            continue

        results.append(
            AllocationResult(
                address=evaluation.address,
                tokens=evaluation.tokens,
                weight=evaluation.weight,
                share=share,
                amount=amount,
                share_percentage=share * 100,
            )
        )

    return results


def distribute(
    holders: Sequence[Holder],
    treasury_total: float,
    fee_reserve_fraction: float = 0.05,
) -> list[AllocationResult]:
    """
    Calculate the reward allocation of every eligible holder.

    An empty result is a valid outcome: no holder was eligible, or every
    computed amount fell below the dust threshold.

    Args:
        holders: Holders of one run, each carrying its own thresholds
        treasury_total: Total reward pool before the fee reserve
        fee_reserve_fraction: Fraction of the pool withheld for fees

    Returns:
        AllocationResults in input order
    """
    _, available = reserve_fees(treasury_total, fee_reserve_fraction)
    return allocate(evaluate_holders(holders), available)
