"""RewardFlow Distribution Tool.

Computes a weighted, proportional split of a reward treasury among token
holders, based on balance size, early-purchase timing and holding duration.
"""

__version__ = "0.1.0"
