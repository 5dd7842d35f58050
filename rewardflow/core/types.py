"""Type definitions and enums for the distribution tool."""

from enum import Enum


class EligibilityStatus(str, Enum):
    """Outcome of the eligibility check for a single holder."""

    ELIGIBLE = "eligible"       # Meets min balance and does not exceed max balance
    BELOW_MIN = "below_min"     # Balance under the minimum threshold (not qualified)
    ABOVE_MAX = "above_max"     # Qualified, but balance over the maximum threshold

    @property
    def display_name(self) -> str:
        """Human-readable display name."""
        names = {
            "eligible": "Qualified",
            "below_min": "Below min",
            "above_max": "Above max",
        }
        return names.get(self.value, self.value)


# Type aliases for common patterns
TokenAmount = float   # Number of tokens held
RewardAmount = float  # Amount of the reward asset (e.g. SOL)
Hours = float         # Hours relative to token launch
Fraction = float      # 0-1 scale
Percentage = float    # 0-100 scale
