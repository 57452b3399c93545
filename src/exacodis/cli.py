"""Command-line interface for Exacodis."""

import json
import logging
import runpy
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from exacodis import __version__
from exacodis.config import ExacodisConfig, create_example_config
from exacodis.core.pilot import Pilot
from exacodis.core.stats import Stats, format_percent
from exacodis.errors import ExacodisError


console = Console()


def print_banner() -> None:
    """Print the Exacodis banner."""
    console.print(
        Panel.fit(
            "[bold blue]Exacodis[/bold blue] - A minimalist test harness",
            subtitle=f"v{__version__}",
        )
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_config(config_path: Optional[str]) -> ExacodisConfig:
    if config_path:
        return ExacodisConfig.from_file(config_path)
    return ExacodisConfig.find_and_load()


def build_pilot(config: ExacodisConfig, base_dir: Path) -> Pilot:
    """Create a pilot with the configured helpers and resources."""
    pilot = Pilot(config.project.title)
    if config.helpers.standard:
        pilot.inject_standard_helpers()
    for path in config.get_absolute_paths(base_dir)["helper_files"]:
        pilot.inject_helpers(path)
    pilot.stage_resources(config.resources)
    return pilot


@click.group()
@click.version_option(version=__version__, prog_name="exacodis")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False),
    help="Path to configuration file (default: exacodis.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """Exacodis - A minimalist test harness.

    Runs test scripts driving a pilot, records assertions and
    generates a static HTML report.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config
    configure_logging(verbose)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="exacodis.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
def init(output: str, force: bool) -> None:
    """Initialize a new Exacodis configuration file."""
    print_banner()

    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(f"[yellow]Configuration file already exists:[/yellow] {output_path}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        create_example_config(output_path)
        console.print(f"[green]Created configuration file:[/green] {output_path}")
        console.print("\nNext steps:")
        console.print("  1. Edit the configuration file for your project")
        console.print("  2. Write a test script driving the global [bold]pilot[/bold]")
        console.print("  3. Run [bold]exacodis run SCRIPT[/bold]")
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {e}")
        sys.exit(1)


@main.command()
@click.argument("script", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--report/--no-report",
    default=True,
    help="Generate HTML report after the script",
)
@click.option(
    "--json",
    "json_output",
    type=click.Path(dir_okay=False),
    help="Also write the results as JSON to this path",
)
@click.pass_context
def run(ctx: click.Context, script: str, report: bool, json_output: Optional[str]) -> None:
    """Execute a test script against a configured pilot.

    The script runs with a global named ``pilot``.
    """
    print_banner()

    config_path = ctx.obj.get("config_path")
    verbose = ctx.obj.get("verbose", False)

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print("Run [bold]exacodis init[/bold] to create a configuration file")
        sys.exit(1)

    base_dir = Path(config_path).parent if config_path else Path.cwd()

    try:
        pilot = build_pilot(config, base_dir)
        if verbose:
            console.print(f"[dim]Loaded {len(pilot.helper_names())} helpers[/dim]")
        runpy.run_path(script, init_globals={"pilot": pilot}, run_name="__main__")
    except ExacodisError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    stats = pilot.get_stats()
    _display_stats_summary(stats)

    if report:
        report_path = config.get_absolute_paths(base_dir)["report_file"]
        pilot.create_report(config.report.max_str_length, output=report_path)
        console.print(f"[green]Report generated:[/green] {report_path}")

    if json_output:
        results_dict = {
            "project": pilot.project_title,
            "stats": stats.to_dict(),
            "runs": [r.to_dict() for r in pilot.get_all_runners().values()],
        }
        json_path = Path(json_output)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_path, "w") as f:
            json.dump(results_dict, f, indent=2, default=repr)
        console.print(f"[green]Results written:[/green] {json_path}")

    if not stats.all_passed:
        sys.exit(1)


@main.command()
@click.pass_context
def helpers(ctx: click.Context) -> None:
    """List the assertion helpers available to test scripts."""
    config_path = ctx.obj.get("config_path")

    try:
        config = load_config(config_path)
        base_dir = Path(config_path).parent if config_path else Path.cwd()
        pilot = build_pilot(config, base_dir)
    except (FileNotFoundError, ValidationError, ExacodisError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    table = Table(title="Assertion Helpers")
    table.add_column("Name", style="cyan")
    for name in pilot.helper_names():
        table.add_row(name)
    console.print(table)


def _display_stats_summary(stats: Stats) -> None:
    """Display a summary of the pilot statistics."""
    console.print("\n" + "=" * 50)
    console.print("[bold]Test Results Summary[/bold]")
    console.print("=" * 50)

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Runs", str(stats.nb_runs))
    table.add_row(
        "Passed runs",
        f"[green]{stats.passed_runs}[/green] ({format_percent(stats.passed_runs_percent)}%)",
    )
    table.add_row(
        "Failed runs",
        f"[red]{stats.failed_runs}[/red] ({format_percent(stats.failed_runs_percent)}%)",
    )
    table.add_row("Assertions", str(stats.nb_assertions))
    table.add_row(
        "Passed assertions",
        f"[green]{stats.passed_assertions}[/green] ({format_percent(stats.passed_assertions_percent)}%)",
    )
    table.add_row(
        "Failed assertions",
        f"[red]{stats.failed_assertions}[/red] ({format_percent(stats.failed_assertions_percent)}%)",
    )
    table.add_row("Duration", f"{stats.milliseconds} ms ({stats.hms})")

    console.print(table)

    if stats.all_passed:
        console.print("\n[green]All runs passed![/green]")
    else:
        console.print("\n[red]Some runs failed![/red]")


if __name__ == "__main__":
    main()
