"""CLI entry point for the RewardFlow distribution tool.

Usage:
    rewardflow distribute holders.csv
    rewardflow distribute holders.yaml --config run.yaml --output csv --save results/run.csv
    rewardflow weight --tokens 20000 --hours-after-launch 0 --hours-since-launch 48
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .calculator.distribution import evaluate_holders
from .calculator.weights import compute_weight
from .core.config import DistributionConfig
from .core.exceptions import RewardFlowError
from .orchestrator import DistributionOrchestrator
from .output.formatters import CSVFormatter, JSONFormatter
from .storage.holder_loader import load_holders

# Initialize app
app = typer.Typer(
    name="rewardflow",
    help="RewardFlow - weighted reward distribution for token holders",
    add_completion=False,
)

# Status and logs go to stderr so stdout stays machine-readable
console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


def _fail(error: Exception, verbose: bool) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/]")
    if verbose:
        console.print_exception()
    raise typer.Exit(1)


@app.command()
def distribute(
    holders_file: Path = typer.Argument(..., help="Holders file (.json, .yaml or .csv)"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to a YAML run configuration",
    ),
    treasury: Optional[float] = typer.Option(
        None,
        "--treasury", "-t",
        help="Treasury balance to distribute",
    ),
    fee_reserve: Optional[float] = typer.Option(
        None,
        "--fee-reserve", "-f",
        help="Fraction of the treasury reserved for fees (0-1)",
    ),
    min_balance: Optional[float] = typer.Option(
        None,
        "--min-balance",
        help="Minimum token balance to qualify",
    ),
    max_balance: Optional[float] = typer.Option(
        None,
        "--max-balance",
        help="Maximum token balance to receive rewards",
    ),
    hours_since_launch: Optional[float] = typer.Option(
        None,
        "--hours-since-launch",
        help="Reference time of the run, in hours after launch",
    ),
    output: str = typer.Option(
        "json",
        "--output", "-o",
        help="Output format: json, csv",
    ),
    save: Optional[Path] = typer.Option(
        None,
        "--save", "-s",
        help="Save output to file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Run a distribution over a holders file.

    Examples:
        rewardflow distribute holders.csv
        rewardflow distribute holders.json --treasury 25 --fee-reserve 0.1
    """
    setup_logging(verbose)

    output_lower = output.lower()
    if output_lower not in ("json", "csv"):
        console.print(f"[red]Invalid output format: {escape(output)}[/]")
        console.print("Valid formats: json, csv")
        raise typer.Exit(1)

    try:
        run_config = DistributionConfig.load(
            config,
            treasury_balance=treasury,
            fee_reserve=fee_reserve,
            min_balance=min_balance,
            max_balance=max_balance,
            hours_since_launch=hours_since_launch,
        )
        report = DistributionOrchestrator(run_config).run_file(holders_file)
    except RewardFlowError as e:
        _fail(e, verbose)

    formatter = JSONFormatter() if output_lower == "json" else CSVFormatter()

    if save:
        save.parent.mkdir(parents=True, exist_ok=True)
        save_path = save.with_suffix(f".{output_lower}")
        formatter.format_to_file(report, str(save_path))
        console.print(f"[green]Saved to {save_path}[/]")
    else:
        print(formatter.format(report))

    if report.is_empty:
        console.print("[yellow]No valid holders for distribution[/]")
    else:
        console.print(
            f"[bold]Distributed {report.stats.total_distributed:.6f} "
            f"to {len(report.allocations)}/{report.stats.total_holders} holders[/]"
        )


@app.command()
def evaluate(
    holders_file: Path = typer.Argument(..., help="Holders file (.json, .yaml or .csv)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a YAML run configuration"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Show each holder's weight and eligibility without distributing."""
    setup_logging(verbose)

    try:
        run_config = DistributionConfig.load(config)
        evaluations = evaluate_holders(load_holders(holders_file, run_config))
    except RewardFlowError as e:
        _fail(e, verbose)

    print(json.dumps([e.model_dump(mode="json") for e in evaluations], indent=2))


@app.command()
def weight(
    tokens: float = typer.Option(..., "--tokens", help="Token balance"),
    hours_after_launch: float = typer.Option(
        ..., "--hours-after-launch", help="Hour of the first purchase after launch"
    ),
    hours_since_launch: Optional[float] = typer.Option(
        None, "--hours-since-launch", help="Reference time in hours after launch"
    ),
    min_balance: Optional[float] = typer.Option(
        None, "--min-balance", help="Minimum token balance to qualify"
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a YAML run configuration"),
) -> None:
    """Compute the weight breakdown of a single holder."""
    setup_logging()

    try:
        # Only min_balance and hours_since_launch matter here; compute_weight checks them
        run_config = DistributionConfig.resolve(
            config,
            hours_since_launch=hours_since_launch,
            min_balance=min_balance,
        )
        result = compute_weight(
            tokens,
            hours_after_launch,
            run_config.hours_since_launch,
            run_config.min_balance,
        )
    except RewardFlowError as e:
        _fail(e, False)

    print(result.model_dump_json(indent=2))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"RewardFlow v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
