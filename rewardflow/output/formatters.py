"""Output formatters for distribution reports.

Provides two output formats:
- JSON: Machine-readable, complete report
- CSV: Spreadsheet-compatible, one row per allocation
"""

import csv
import io
import json
import logging
from abc import ABC, abstractmethod

from ..core.models import DistributionReport

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "address",
    "tokens",
    "hours_held",
    "balance_weight",
    "early_bonus",
    "tenure_bonus",
    "time_weight",
    "total_weight",
    "share",
    "share_percentage",
    "amount",
]


class OutputFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(self, report: DistributionReport) -> str:
        """Format the report as a string."""
        pass

    def format_to_file(self, report: DistributionReport, filepath: str) -> None:
        """Write the formatted report to a file."""
        with open(filepath, "w", encoding="utf-8", newline="") as f:
            f.write(self.format(report))
        logger.debug(f"Wrote {type(self).__name__} output to {filepath}")


class JSONFormatter(OutputFormatter):
    """Formats reports as JSON."""

    def __init__(self, indent: int = 2, include_evaluations: bool = True):
        """
        Initialize JSON formatter.

        Args:
            indent: JSON indentation level
            include_evaluations: Include per-holder eligibility evaluations
        """
        self.indent = indent
        self.include_evaluations = include_evaluations

    def format(self, report: DistributionReport) -> str:
        """Format report as JSON string."""
        exclude = None if self.include_evaluations else {"evaluations"}
        data = report.model_dump(mode="json", exclude=exclude)
        return json.dumps(data, indent=self.indent)


class CSVFormatter(OutputFormatter):
    """Formats allocations as CSV, largest reward first."""

    def __init__(self, delimiter: str = ","):
        """
        Initialize CSV formatter.

        Args:
            delimiter: CSV delimiter
        """
        self.delimiter = delimiter

    def format(self, report: DistributionReport) -> str:
        """Format report allocations as CSV string."""
        output = io.StringIO()
        writer = csv.writer(output, delimiter=self.delimiter, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)

        for alloc in sorted(report.allocations, key=lambda a: a.amount, reverse=True):
            w = alloc.weight
            writer.writerow([
                alloc.address,
                alloc.tokens,
                w.hours_held,
                w.balance_weight,
                w.early_bonus,
                w.tenure_bonus,
                w.time_weight,
                w.total_weight,
                alloc.share,
                alloc.share_percentage,
                alloc.amount,
            ])

        return output.getvalue()
