"""Tests for the statistics aggregator."""

import pytest

from rewardflow.calculator.distribution import distribute
from rewardflow.calculator.stats import summarize


class TestSummarize:
    """Tests for summarize()."""

    def test_counts_and_totals(self, sample_holders):
        """Test holder counts and sums."""
        allocations = distribute(sample_holders, treasury_total=10, fee_reserve_fraction=0.05)
        stats = summarize(sample_holders, allocations)

        assert stats.total_holders == 5
        assert stats.total_distributed == pytest.approx(9.5)
        assert stats.total_weightage == pytest.approx(
            sum(a.weight.total_weight for a in allocations)
        )

    def test_valid_holders_ignores_max_balance(self, sample_holders):
        """Test that the min-only count includes holders above the maximum."""
        allocations = distribute(sample_holders, treasury_total=10)
        stats = summarize(sample_holders, allocations)

        # Three eligible holders plus the one above max; only the 5K holder is out
        assert stats.valid_holders == 4
        assert len(allocations) == 3
        assert stats.total_tokens == 20_000 + 1_500_000 + 250_000 + 250_000_000

    def test_averages(self, sample_holders):
        """Test average weight and reward over the allocations."""
        allocations = distribute(sample_holders, treasury_total=10, fee_reserve_fraction=0.05)
        stats = summarize(sample_holders, allocations)

        assert stats.average_reward == pytest.approx(9.5 / 3)
        assert stats.average_weight == pytest.approx(stats.total_weightage / 3)

    def test_extremes(self, sample_holders):
        """Test top and bottom recipients."""
        allocations = distribute(sample_holders, treasury_total=10, fee_reserve_fraction=0.05)
        stats = summarize(sample_holders, allocations)

        assert stats.top_reward.amount == max(a.amount for a in allocations)
        assert stats.bottom_reward.amount == min(a.amount for a in allocations)
        assert stats.top_weight.weight.total_weight == max(a.weight.total_weight for a in allocations)
        assert stats.bottom_weight.weight.total_weight == min(
            a.weight.total_weight for a in allocations
        )
        # Reward follows weight
        assert stats.top_reward.address == stats.top_weight.address

    def test_ties_keep_input_order(self, make_holder):
        """Test that ties resolve to the first holder on top and the last at the bottom."""
        holders = [
            make_holder("first", 50_000, 0),
            make_holder("second", 50_000, 0),
            make_holder("third", 50_000, 0),
        ]
        allocations = distribute(holders, treasury_total=3)
        stats = summarize(holders, allocations)

        assert stats.top_reward.address == "first"
        assert stats.top_weight.address == "first"
        assert stats.bottom_reward.address == "third"
        assert stats.bottom_weight.address == "third"

    def test_empty_allocations(self, make_holder):
        """Test that an empty distribution leaves averages and extremes unset."""
        holders = [make_holder("small", 1_000, 0)]
        stats = summarize(holders, [])

        assert stats.total_holders == 1
        assert stats.valid_holders == 0
        assert stats.total_tokens == 0
        assert stats.total_distributed == 0
        assert stats.average_weight is None
        assert stats.average_reward is None
        assert stats.top_reward is None
        assert stats.bottom_weight is None

    def test_no_holders(self):
        """Test summarizing an empty run."""
        stats = summarize([], [])
        assert stats.total_holders == 0
        assert stats.total_weightage == 0

    def test_does_not_mutate_inputs(self, sample_holders):
        """Test that inputs keep their order and content."""
        allocations = distribute(sample_holders, treasury_total=10)
        holders_before = list(sample_holders)
        allocations_before = list(allocations)

        summarize(sample_holders, allocations)

        assert sample_holders == holders_before
        assert allocations == allocations_before

    def test_idempotent(self, sample_holders):
        """Test repeated summaries are identical."""
        allocations = distribute(sample_holders, treasury_total=10)
        assert summarize(sample_holders, allocations) == summarize(sample_holders, allocations)
