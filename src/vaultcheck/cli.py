"""Command-line interface for the vaultcheck engine."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from vaultcheck.config.settings import EngineConfig

app = typer.Typer(
    name="vaultcheck",
    help="Check a backup healthcheck export for cloud-vault compatibility.",
    no_args_is_help=True,
)

console = Console()

ExportArgument = Annotated[
    Path,
    typer.Argument(help="Path to the healthcheck export JSON file.", dir_okay=False),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Optional YAML file overriding rule thresholds.",
        dir_okay=False,
    ),
]


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", "-l", help="Log level for diagnostics on stderr."),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON lines."),
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    from vaultcheck.utils.logging import configure_logging

    configure_logging(level=log_level, json_output=json_logs)


def _load_inputs(export: Path, config: Path | None) -> tuple[Any, "EngineConfig"]:
    """Load the export root and engine config, exiting with code 1 on bad input."""
    import yaml

    from vaultcheck.config.loader import load_config
    from vaultcheck.ingestion.export import load_export

    try:
        engine_config = load_config(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    try:
        root = load_export(export)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    return root, engine_config


@app.command()
def analyze(
    export: ExportArgument,
    config: ConfigOption = None,
    jobs_csv: Annotated[
        Path | None,
        typer.Option(
            "--jobs-csv",
            help="Write the enriched job table to this CSV file.",
            dir_okay=False,
        ),
    ] = None,
    show_data_errors: Annotated[
        bool,
        typer.Option(
            "--show-data-errors",
            help="List rows dropped during normalization.",
        ),
    ] = False,
    show_jobs: Annotated[
        bool,
        typer.Option(
            "--show-jobs",
            help="List every job with its sizes and session statistics.",
        ),
    ] = False,
) -> None:
    """
    Run the compliance checks against a healthcheck export.

    Exits with code 1 when any check fails.
    """
    from pandera.errors import SchemaError

    from vaultcheck.analysis.jobs import enrich_jobs
    from vaultcheck.analysis.pipeline import analyze_healthcheck
    from vaultcheck.analysis.tables import jobs_frame
    from vaultcheck.utils.logging import log_context
    from vaultcheck.validation import ConsoleReporter, ValidationStatus

    root, engine_config = _load_inputs(export, config)

    with log_context(export=str(export)):
        result = analyze_healthcheck(root, engine_config)

    reporter = ConsoleReporter(console)
    reporter.print_results(result.validations)

    if show_jobs:
        console.print()
        reporter.print_jobs(enrich_jobs(result.dataset.jobs, result.dataset.job_sessions))

    data_errors = result.dataset.data_errors
    if show_data_errors:
        console.print()
        reporter.print_data_errors(data_errors)
    elif data_errors:
        console.print(
            f"\n[dim]{len(data_errors)} rows were skipped as data errors "
            "(use --show-data-errors to list them).[/dim]"
        )

    if jobs_csv is not None:
        try:
            df = jobs_frame(result.dataset)
        except SchemaError as e:
            console.print(f"[red]Job table failed validation: {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e
        df.to_csv(jobs_csv, index=False)
        console.print(f"\n[green]Saved job table to: {jobs_csv}[/green]")

    if any(v.status == ValidationStatus.FAIL for v in result.validations):
        raise typer.Exit(code=1)


@app.command()
def sizing(
    export: ExportArgument,
    config: ConfigOption = None,
    request: Annotated[
        bool,
        typer.Option(
            "--request",
            help="Also print the calculator request payload as JSON.",
        ),
    ] = False,
) -> None:
    """Show the sizing figures derived from a healthcheck export."""
    from vaultcheck.analysis.pipeline import analyze_healthcheck
    from vaultcheck.sizing.request import build_sizing_request
    from vaultcheck.validation import ConsoleReporter

    root, engine_config = _load_inputs(export, config)

    result = analyze_healthcheck(root, engine_config)
    summary = result.calculator_summary()

    ConsoleReporter(console).print_calculator_summary(summary)

    if request:
        payload = build_sizing_request(summary, len(result.dataset.jobs)).to_payload()
        console.print()
        console.print_json(data=payload)


@app.command()
def version() -> None:
    """Show version information."""
    from vaultcheck import __version__

    console.print(f"vaultcheck version {__version__}")


if __name__ == "__main__":
    app()
