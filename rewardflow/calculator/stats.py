"""Summary statistics over a distribution run."""

from collections.abc import Sequence

from ..core.models import AllocationResult, DistributionStats, Holder


def summarize(
    holders: Sequence[Holder],
    allocations: Sequence[AllocationResult],
) -> DistributionStats:
    """
    Compute summary metrics for a distribution.

    valid_holders and total_tokens only apply the minimum balance check,
    so holders above max_balance are still counted there.

    Args:
        holders: All holders of the run
        allocations: Output of distribute() for those holders

    Returns:
        DistributionStats; averages and extremes are None when there
        are no allocations
    """
    valid = [h for h in holders if h.tokens >= h.min_balance]
    total_weightage = sum(a.weight.total_weight for a in allocations)
    total_distributed = sum(a.amount for a in allocations)

    stats = {
        "total_holders": len(holders),
        "valid_holders": len(valid),
        "total_tokens": sum(h.tokens for h in valid),
        "total_weightage": total_weightage,
        "total_distributed": total_distributed,
    }

    if not allocations:
        return DistributionStats(**stats)

    # sorted() is stable with reverse=True, so ties keep input order
    by_weight = sorted(allocations, key=lambda a: a.weight.total_weight, reverse=True)
    by_reward = sorted(allocations, key=lambda a: a.amount, reverse=True)

    return DistributionStats(
        **stats,
        average_weight=total_weightage / len(allocations),
        average_reward=total_distributed / len(allocations),
        top_weight=by_weight[0],
        top_reward=by_reward[0],
        bottom_weight=by_weight[-1],
        bottom_reward=by_reward[-1],
    )
