"""Main orchestrator for a distribution run.

Threads the run configuration and holder records through weighting,
distribution and statistics to produce a complete DistributionReport.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .calculator.distribution import allocate, evaluate_holders, reserve_fees
from .calculator.stats import summarize
from .core.config import DistributionConfig
from .core.models import DistributionReport, Holder
from .storage.holder_loader import load_holders

logger = logging.getLogger(__name__)


class DistributionOrchestrator:
    """Runs the complete distribution pipeline for one configuration."""

    def __init__(self, config: DistributionConfig | None = None):
        """
        Initialize the orchestrator.

        Args:
            config: Run configuration (defaults plus environment if not provided)
        """
        self.config = config or DistributionConfig.load()
        self.config.validate()

    def run(self, holders: Sequence[Holder]) -> DistributionReport:
        """
        Perform a complete distribution run.

        Eligibility uses the thresholds carried by each holder. The report
        records the thresholds of this orchestrator's config, which match
        the holders whenever they were built with config.make_holder or
        loaded through run_file.

        Args:
            holders: Holders of the run; each carries its own thresholds

        Returns:
            DistributionReport with evaluations, allocations and statistics
        """
        config = self.config
        fee_amount, available = reserve_fees(config.treasury_balance, config.fee_reserve)

        evaluations = evaluate_holders(holders)
        eligible_count = sum(1 for e in evaluations if e.is_eligible)
        logger.info(
            f"Holders: {len(holders)} total, {eligible_count} qualified, "
            f"{len(holders) - eligible_count} filtered out"
        )

        allocations = allocate(evaluations, available)
        if not allocations:
            logger.warning("No valid holders for distribution")

        stats = summarize(holders, allocations)
        logger.info(
            f"Distributed {stats.total_distributed:.6f} of {available:.6f} "
            f"to {len(allocations)} holders (fee reserve {fee_amount:.6f})"
        )

        return DistributionReport(
            treasury_balance=config.treasury_balance,
            fee_reserve=config.fee_reserve,
            fee_amount=fee_amount,
            available_for_distribution=available,
            min_balance=config.min_balance,
            max_balance=config.max_balance,
            hours_since_launch=config.hours_since_launch,
            evaluations=evaluations,
            allocations=allocations,
            stats=stats,
            tool_version=__version__,
        )

    def run_file(self, holders_path: Path | str) -> DistributionReport:
        """Load holders from a file and run the distribution."""
        return self.run(load_holders(holders_path, self.config))
