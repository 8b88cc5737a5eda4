"""
Console reporter for analysis results.

Formats rule verdicts, data errors, the job listing and the calculator
summary using Rich.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vaultcheck.schemas.records import DataError
from vaultcheck.sizing.aggregator import CalculatorSummary
from vaultcheck.utils.formatting import (
    format_compression_ratio,
    format_days,
    format_duration,
    format_gfs,
    format_percent,
    format_size,
    format_tb,
)
from vaultcheck.validation.results import ValidationResult, ValidationStatus
from vaultcheck.validation.selectors import get_blocker_count

if TYPE_CHECKING:
    from vaultcheck.analysis.jobs import EnrichedJob

_STATUS_MARKUP = {
    ValidationStatus.PASS: "[green]Pass[/green]",
    ValidationStatus.FAIL: "[red]Fail[/red]",
    ValidationStatus.WARNING: "[yellow]Warning[/yellow]",
    ValidationStatus.INFO: "[blue]Info[/blue]",
}


class ConsoleReporter:
    """Formats and displays analysis results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_results(self, results: Sequence[ValidationResult]) -> None:
        """
        Print rule verdicts as a table, then a summary and the affected items.

        Args:
            results: Validation results in rule order.
        """
        table = Table(title="Vault Compatibility Checks", show_header=True)
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("Check")
        table.add_column("Status", justify="center")
        table.add_column("Affected", justify="right")

        for result in results:
            table.add_row(
                result.rule_id,
                result.title,
                _STATUS_MARKUP[result.status],
                str(len(result.affected_items)) if result.affected_items else "-",
            )

        self.console.print(table)
        self._print_summary(results)
        self._print_findings(results)

    def _print_summary(self, results: Sequence[ValidationResult]) -> None:
        counts = {status: 0 for status in ValidationStatus}
        for result in results:
            counts[result.status] += 1

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Total checks: {len(results)}")
        self.console.print(f"  [green]Passed: {counts[ValidationStatus.PASS]}[/green]")
        self.console.print(f"  [red]Failed: {counts[ValidationStatus.FAIL]}[/red]")
        self.console.print(
            f"  [yellow]Warnings: {counts[ValidationStatus.WARNING]}[/yellow]"
        )
        self.console.print(f"  [blue]Info: {counts[ValidationStatus.INFO]}[/blue]")
        self.console.print(f"  Blockers: {get_blocker_count(results)}")

    def _print_findings(self, results: Sequence[ValidationResult]) -> None:
        flagged = [r for r in results if r.status != ValidationStatus.PASS]
        if not flagged:
            return

        self.console.print()
        self.console.print("[bold]Findings:[/bold]")
        for result in flagged:
            self.console.print()
            self.console.print(f"{_STATUS_MARKUP[result.status]} [bold]{result.title}[/bold]")
            self.console.print(f"  {escape(result.message)}")
            for item in result.affected_items:
                self.console.print(f"  - {escape(item)}")

    def print_data_errors(self, errors: Sequence[DataError]) -> None:
        """
        Print rows dropped during normalization.

        Args:
            errors: Data errors in the order they were recorded.
        """
        if not errors:
            self.console.print("[green]No data errors.[/green]")
            return

        table = Table(title=f"Data Errors ({len(errors)})", show_header=True)
        table.add_column("Section", style="cyan")
        table.add_column("Row", justify="right")
        table.add_column("Field", style="blue")
        table.add_column("Reason", style="dim")
        for error in errors:
            table.add_row(
                error.section,
                str(error.row_index),
                escape(error.field),
                escape(error.reason),
            )
        self.console.print(table)

    def print_calculator_summary(self, summary: CalculatorSummary) -> None:
        """
        Print the sizing figures derived from the healthcheck.

        Args:
            summary: Calculator summary.
        """
        table = Table(title="Calculator Summary", show_header=True)
        table.add_column("Figure", style="cyan")
        table.add_column("Value", justify="right")

        retention = format_days(summary.max_retention_days)
        if (
            summary.original_max_retention_days is not None
            and summary.original_max_retention_days != summary.max_retention_days
        ):
            retention += f" (configured {format_days(summary.original_max_retention_days)})"

        table.add_row("Total source data", format_tb(summary.total_source_data_tb))
        table.add_row("Weighted change rate", format_percent(summary.weighted_avg_change_rate))
        table.add_row("Immutability", format_days(summary.immutability_days))
        table.add_row("Max retention", retention)
        table.add_row(
            "GFS",
            format_gfs(summary.gfs_weekly, summary.gfs_monthly, summary.gfs_yearly),
        )
        self.console.print(table)

    def print_jobs(self, jobs: Sequence["EnrichedJob"]) -> None:
        """
        Print one row per job with its sizes and session statistics.

        Args:
            jobs: Jobs paired with their session summaries.
        """
        table = Table(title=f"Jobs ({len(jobs)})", show_header=True)
        table.add_column("Job", style="cyan")
        table.add_column("Type")
        table.add_column("Repository")
        table.add_column("Retention", justify="right")
        table.add_column("Source", justify="right")
        table.add_column("On Disk", justify="right")
        table.add_column("Reduction", justify="right")
        table.add_column("Change Rate", justify="right")
        table.add_column("Avg Duration", justify="right")

        for enriched in jobs:
            job, session = enriched.job, enriched.session
            table.add_row(
                escape(job.job_name),
                escape(job.job_type),
                escape(job.repo_name),
                format_days(job.retain_days),
                format_size(job.source_size_gb),
                format_size(job.on_disk_gb),
                format_compression_ratio(job.source_size_gb, job.on_disk_gb),
                format_percent(session.avg_change_rate if session else None),
                format_duration(session.avg_job_time if session else None),
            )
        self.console.print(table)
