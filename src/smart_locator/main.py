"""
Smart Locator - CLI Entry Point.

Usage:
    smart-locator stats
    smart-locator report --history test-results/locator-history.json
    smart-locator report --output build/locator-reports
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from smart_locator.config import get_settings
from smart_locator.locator import HistoryStore
from smart_locator.reporting import LocatorReport, RateStatus
from smart_locator.utils.logging import setup_logging

app = typer.Typer(
    name="smart-locator",
    help="Inspect and report on resilient locator history",
    add_completion=False,
)

console = Console()

STATUS_STYLES = {
    RateStatus.GOOD: "green",
    RateStatus.MODERATE: "yellow",
    RateStatus.POOR: "red",
    RateStatus.NEUTRAL: "dim",
}


def _configure_logging(verbose: bool) -> None:
    log = get_settings().logging
    setup_logging("DEBUG" if verbose else log.level, log_file=log.file, json_format=log.json_format)


def _load_report(history: Optional[Path]) -> LocatorReport:
    settings = get_settings()
    path = history or Path(settings.locator.history_file)
    if not path.exists():
        console.print(f"[red]Error: history file not found: {path}[/red]")
        raise typer.Exit(1)

    store = HistoryStore.from_path(path)
    return LocatorReport.from_history(store.history)


@app.command()
def stats(
    history: Optional[Path] = typer.Option(None, "--history", "-h", help="Locator history file (default: from config)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """Print success/failure statistics per element key."""
    _configure_logging(verbose)
    report = _load_report(history)

    table = Table(title="Locator History")
    table.add_column("Key", style="cyan")
    table.add_column("Primary Selector")
    table.add_column("Successes", justify="right")
    table.add_column("Failures", justify="right")
    table.add_column("Success Rate", justify="right")
    table.add_column("Last Used")

    for row in sorted(report.rows, key=lambda r: r.key):
        rate = "N/A" if row.success_rate is None else f"{row.success_rate * 100:.1f}%"
        table.add_row(
            row.key,
            row.selector,
            str(row.success_count),
            str(row.failure_count),
            f"[{STATUS_STYLES[row.status]}]{rate}[/]",
            row.last_used.strftime("%Y-%m-%d %H:%M:%S"),
        )

    console.print(table)
    console.print(
        f"{report.total_locators} locators, "
        f"{report.overall_success_rate * 100:.1f}% overall success, "
        f"{report.total_alternatives} cached alternatives"
    )


@app.command()
def report(
    history: Optional[Path] = typer.Option(None, "--history", "-h", help="Locator history file (default: from config)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Report directory (default: from config)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """Write HTML and JSON locator reports."""
    _configure_logging(verbose)
    locator_report = _load_report(history)

    report_dir = output or Path(get_settings().locator.report_dir)
    html_path, json_path = locator_report.write(report_dir)

    console.print(f"[green]HTML report:[/green] {html_path}")
    console.print(f"[green]JSON report:[/green] {json_path}")


def main():
    app()


if __name__ == "__main__":
    main()
