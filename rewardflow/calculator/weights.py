"""Weight calculator for a single holder.

All calculations use explicit formulas:
- balance_weight = 1 + log10(token_balance / min_balance)
- early_bonus    = 1 + 2 × exp(-days_since_launch / 2)
- tenure_bonus   = 1 + 0.6 × log2(days_held + 1)
- time_weight    = early_bonus × tenure_bonus
- total_weight   = balance_weight × time_weight

where days_since_launch is the day of the first purchase (relative to
launch) and days_held is the time between that purchase and the reference
time of the run.
"""

import math

from ..core.models import HOURS_PER_DAY, WeightResult
from .validation import validate_holder_inputs, validate_thresholds

EARLY_BONUS_AMPLITUDE = 2.0
EARLY_BONUS_DECAY_DAYS = 2.0
TENURE_BONUS_FACTOR = 0.6

DISQUALIFIED = WeightResult()


def balance_weight(token_balance: float, min_balance: float) -> float:
    """
    Calculate the balance component of the weight.

    Formula: 1 + log10(token_balance / min_balance)

    Equals 1 at the minimum balance and grows logarithmically, so large
    balances are damped.

    Args:
        token_balance: Tokens held (must be >= min_balance)
        min_balance: Minimum balance threshold (must be positive)

    Returns:
        Balance weight (>= 1 for qualifying balances)
    """
    return 1 + math.log10(token_balance) - math.log10(min_balance)


def early_bonus(days_since_launch: float) -> float:
    """
    Calculate the early-purchase bonus.

    Formula: 1 + 2 × exp(-days_since_launch / 2)

    Equals 3 for a purchase at launch and decays towards 1.

    Args:
        days_since_launch: Day of the first purchase, relative to launch

    Returns:
        Early bonus in (1, 3]
    """
    return 1 + EARLY_BONUS_AMPLITUDE * math.exp(-days_since_launch / EARLY_BONUS_DECAY_DAYS)


def tenure_bonus(days_held: float) -> float:
    """
    Calculate the holding-duration bonus.

    Formula: 1 + 0.6 × log2(days_held + 1)

    Args:
        days_held: Days between first purchase and the reference time

    Returns:
        Tenure bonus (1 at zero days held)
    """
    return 1 + TENURE_BONUS_FACTOR * math.log2(days_held + 1)


def compute_weight(
    token_balance: float,
    hours_after_launch: float,
    hours_since_launch: float,
    min_balance: float,
) -> WeightResult:
    """
    Compute the qualification and weight of a single holder.

    A balance below min_balance disqualifies the holder and yields an
    all-zero result. The max balance check is applied by the caller.

    Args:
        token_balance: Tokens held
        hours_after_launch: Hour of the first purchase, relative to launch
        hours_since_launch: Reference time of the run, in hours after launch
        min_balance: Minimum balance required to qualify

    Returns:
        WeightResult with every intermediate factor

    Raises:
        ConfigurationError: If min_balance is not a positive finite number
        HolderValidationError: If the holder inputs are malformed
    """
    validate_thresholds(min_balance)
    validate_holder_inputs(token_balance, hours_after_launch, hours_since_launch)

    if token_balance < min_balance:
        return DISQUALIFIED

    hours_held = hours_since_launch - hours_after_launch
    days_since_launch = hours_after_launch / HOURS_PER_DAY
    days_held = hours_held / HOURS_PER_DAY

    weight_from_balance = balance_weight(token_balance, min_balance)
    bonus_early = early_bonus(days_since_launch)
    bonus_tenure = tenure_bonus(days_held)
    time_weight = bonus_early * bonus_tenure

    return WeightResult(
        balance_weight=weight_from_balance,
        early_bonus=bonus_early,
        tenure_bonus=bonus_tenure,
        time_weight=time_weight,
        total_weight=weight_from_balance * time_weight,
        hours_held=hours_held,
        qualified=True,
    )
