"""Input validation for the weighting and distribution steps.

Malformed configuration and malformed holder records are rejected here,
before any arithmetic runs. Falling below the minimum balance or above the
maximum balance is not a validation failure; it is handled as eligibility.
"""

import math
from collections.abc import Iterable

from ..core.exceptions import ConfigurationError, DuplicateHolderError, HolderValidationError
from ..core.models import Holder


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_thresholds(min_balance: float, max_balance: float | None = None) -> None:
    """Check the balance thresholds of a run."""
    if not _is_number(min_balance) or not math.isfinite(min_balance):
        raise ConfigurationError("min_balance", f"must be a finite number, got {min_balance!r}")
    if min_balance <= 0:
        raise ConfigurationError("min_balance", f"must be positive, got {min_balance}")

    if max_balance is None:
        return
    if not _is_number(max_balance) or not math.isfinite(max_balance):
        raise ConfigurationError("max_balance", f"must be a finite number, got {max_balance!r}")
    if max_balance < min_balance:
        raise ConfigurationError(
            "max_balance", f"must be >= min_balance ({min_balance}), got {max_balance}"
        )


def validate_holder_inputs(
    token_balance: float,
    hours_after_launch: float,
    hours_since_launch: float,
    address: str | None = None,
) -> None:
    """Check the per-holder numeric inputs of the weight formula."""
    if not _is_number(hours_since_launch) or not math.isfinite(hours_since_launch):
        raise ConfigurationError(
            "hours_since_launch", f"must be a finite number, got {hours_since_launch!r}"
        )

    if not _is_number(token_balance) or not math.isfinite(token_balance):
        raise HolderValidationError("tokens", token_balance, "must be a finite number", address)
    if token_balance < 0:
        raise HolderValidationError("tokens", token_balance, "must not be negative", address)

    if not _is_number(hours_after_launch) or not math.isfinite(hours_after_launch):
        raise HolderValidationError(
            "hours_after_launch", hours_after_launch, "must be a finite number", address
        )
    if hours_after_launch < 0:
        raise HolderValidationError(
            "hours_after_launch", hours_after_launch, "must not be negative", address
        )
    if hours_after_launch > hours_since_launch:
        raise HolderValidationError(
            "hours_after_launch",
            hours_after_launch,
            f"first purchase is after the reference time ({hours_since_launch}h)",
            address,
        )


def validate_holder(holder: Holder) -> None:
    """Check a full holder record, thresholds included."""
    if not holder.address or not holder.address.strip():
        raise HolderValidationError("address", holder.address, "must not be empty")
    validate_thresholds(holder.min_balance, holder.max_balance)
    validate_holder_inputs(
        holder.tokens,
        holder.hours_after_launch,
        holder.hours_since_launch,
        address=holder.address,
    )


def validate_pool(treasury_total: float, fee_reserve_fraction: float) -> None:
    """Check the reward pool parameters."""
    if not _is_number(treasury_total) or not math.isfinite(treasury_total):
        raise ConfigurationError("treasury_balance", f"must be a finite number, got {treasury_total!r}")
    if treasury_total < 0:
        raise ConfigurationError("treasury_balance", f"must not be negative, got {treasury_total}")

    if not _is_number(fee_reserve_fraction) or not math.isfinite(fee_reserve_fraction):
        raise ConfigurationError(
            "fee_reserve", f"must be a finite number, got {fee_reserve_fraction!r}"
        )
    if not 0 <= fee_reserve_fraction < 1:
        raise ConfigurationError("fee_reserve", f"must be in [0, 1), got {fee_reserve_fraction}")


def ensure_unique_addresses(holders: Iterable[Holder]) -> None:
    """Reject runs that list the same address twice (case-insensitive)."""
    seen: dict[str, str] = {}
    for holder in holders:
        key = holder.address.strip().lower()
        if key in seen:
            raise DuplicateHolderError(holder.address, existing_address=seen[key])
        seen[key] = holder.address
