"""rdbloader CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rdbloader import __version__
from rdbloader._constants import DEFAULT_CONFIG, REDACTED
from rdbloader.config import (
    Config,
    ConfigError,
    ConfigFileNotFoundError,
    ConfigValidationError,
    generate_example_config_yaml,
    load_config,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="rdbloader",
    help="Validate and inspect Snowplow pipeline configuration",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    epilog="[dim]Workflow: init -> validate -> show[/dim]",
)

console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Helper Functions
# =============================================================================


def resolve_config_path(
    config_file: Path | None,
    file_option: Path | None = None,
) -> Path:
    """Resolve config file path, using ./config.yml as default.

    Supports both positional argument and --file/-f option.
    If both are provided, --file takes precedence.
    """
    path = file_option or config_file
    if path is not None:
        return path

    default = Path(DEFAULT_CONFIG)
    if default.exists():
        return default

    print_error(f"No config file specified and ./{DEFAULT_CONFIG} not found")
    print_info("Create one with: rdbloader init")
    raise typer.Exit(1)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]OK[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]ERROR[/red] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]...[/blue] {message}")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


def _load_or_exit(config_file: Path) -> Config:
    """Load config, printing every problem and exiting 1 on failure."""
    try:
        return load_config(config_file)
    except ConfigFileNotFoundError as e:
        print_error(f"File not found: {escape(str(e))}")
        raise typer.Exit(1)  # noqa: B904
    except ConfigValidationError as e:
        print_error(f"Config validation failed ({len(e.failures)} problem(s)):")
        for failure in e.failures:
            err_console.print(f"  [red]•[/red] {escape(str(failure))}")
        raise typer.Exit(1)  # noqa: B904
    except ConfigError as e:
        print_error(f"Config error: {escape(str(e))}")
        raise typer.Exit(1)  # noqa: B904


def _optional(value: object) -> str:
    return "-" if value is None else str(value)


def build_summary_table(cfg: Config) -> Table:
    """Summarise a decoded config. The secret access key is never shown."""
    table = Table(title="Configuration", show_header=True, header_style="bold")
    table.add_column("Setting")
    table.add_column("Value")

    aws = cfg.aws
    buckets = aws.s3.buckets
    jobflow = aws.emr.jobflow
    rows = [
        ("aws.access_key_id", aws.access_key_id),
        ("aws.secret_access_key", REDACTED),
        ("aws.s3.region", aws.s3.region),
        ("aws.s3.buckets.assets", buckets.assets),
        ("aws.s3.buckets.jsonpath_assets", _optional(buckets.jsonpath_assets)),
        ("aws.s3.buckets.log", buckets.log),
        ("aws.s3.buckets.enriched.good", buckets.enriched.good),
        ("aws.s3.buckets.shredded.good", buckets.shredded.good),
        ("aws.emr.ami_version", aws.emr.ami_version),
        ("aws.emr.region", aws.emr.region),
        ("aws.emr.placement", _optional(aws.emr.placement)),
        ("aws.emr.ec2_subnet_id", _optional(aws.emr.ec2_subnet_id)),
        (
            "aws.emr.jobflow",
            f"1 x {jobflow.master_instance_type}, "
            f"{jobflow.core_instance_count} x {jobflow.core_instance_type} core, "
            f"{jobflow.task_instance_count} x {jobflow.task_instance_type} task "
            f"(bid {jobflow.task_instance_bid})",
        ),
        ("aws.emr.bootstrap_failure_tries", str(aws.emr.bootstrap_failure_tries)),
        ("collectors.format", cfg.collectors.format.as_string),
        ("enrich.job_name", cfg.enrich.job_name),
        ("enrich.output_compression", cfg.enrich.output_compression.as_string),
        (
            "enrich.continue_on_unexpected_error",
            str(cfg.enrich.continue_on_unexpected_error).lower(),
        ),
        ("storage.download.folder", _optional(cfg.get_download_folder())),
        ("monitoring.logging.level", cfg.monitoring.logging.level.as_string),
        ("monitoring.snowplow.method", cfg.monitoring.snowplow.method.as_string),
        ("monitoring.snowplow.collector", cfg.monitoring.snowplow.collector),
    ]
    for key, value in rows:
        table.add_row(key, escape(value))
    return table


# =============================================================================
# CLI Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"rdbloader version {__version__}")


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output file path for configuration",
        ),
    ] = Path(DEFAULT_CONFIG),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing file",
        ),
    ] = False,
) -> None:
    """Generate a starter configuration file.

    Fill in the AWS credentials and bucket paths, then run 'rdbloader validate'.
    """
    if output.exists() and not force:
        print_error(f"File already exists: {escape(str(output))}")
        print_info("Use --force to overwrite")
        raise typer.Exit(1)

    output.write_text(generate_example_config_yaml())
    print_success(f"Configuration written to {escape(str(output))}")
    print_info("Set aws.access_key_id and aws.secret_access_key before validating")


@app.command()
def validate(
    config_file: Annotated[
        Path | None,
        typer.Argument(
            help="Path to configuration YAML file (default: ./config.yml)",
        ),
    ] = None,
    file_option: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Path to configuration YAML file (alternative to positional argument)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show detailed validation output",
        ),
    ] = False,
) -> None:
    """Validate a configuration file.

    Every problem in the file is reported in one run, each with the dotted
    path of the offending key.
    """
    _configure_logging(verbose)
    config_file = resolve_config_path(config_file, file_option)
    panel = Panel(f"Validating: [bold]{escape(str(config_file))}[/bold]", expand=False)
    console.print(panel)

    cfg = _load_or_exit(config_file)
    print_success("Config valid")

    if verbose:
        console.print(f"  Collector format: {cfg.collectors.format.as_string}")
        console.print(f"  Job name: {escape(cfg.enrich.job_name)}")


@app.command()
def show(
    config_file: Annotated[
        Path | None,
        typer.Argument(
            help="Path to configuration YAML file (default: ./config.yml)",
        ),
    ] = None,
    file_option: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Path to configuration YAML file (alternative to positional argument)",
        ),
    ] = None,
) -> None:
    """Print the decoded configuration."""
    config_file = resolve_config_path(config_file, file_option)
    cfg = _load_or_exit(config_file)
    console.print(build_summary_table(cfg))


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
