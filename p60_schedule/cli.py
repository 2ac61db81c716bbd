"""CLI for p60-schedule - describe the Portfolio 60 scraping schedule."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from p60_schedule import __version__
from p60_schedule.config import ScheduleConfig, get_scheduling_config
from p60_schedule.cron_describe import CronParseError, describe_schedule, parse_field
from p60_schedule.status import get_scheduler_status

app = typer.Typer(name="p60-schedule", help="Describe the Portfolio 60 scraping schedule.", add_completion=False)
console = Console()

STATUS_LABELS = {
    "enabled": "Enabled",
    "cronExpression": "Cron",
    "description": "Schedule",
    "runOnStartupIfMissed": "Run If Missed",
    "startupDelayMinutes": "Startup Delay (min)",
    "nextRun": "Next Run",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


def _format_value(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "[green]Yes[/green]" if value else "[yellow]No[/yellow]"
    return str(value)


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"p60-schedule {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[Optional[bool], typer.Option("--version", "-v", callback=_version_callback, is_eager=True)] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Debug logging")] = False,
) -> None:
    _setup_logging(verbose)


@app.command()
def describe(
    cron: Annotated[str, typer.Argument(help="Cron expression (5 fields)")],
    startup: Annotated[bool, typer.Option("--startup", "-s", help="Run on startup if missed")] = False,
    disabled: Annotated[bool, typer.Option("--disabled", help="Scheduling is disabled")] = False,
) -> None:
    """Describe a cron expression in words."""
    config = ScheduleConfig(enabled=not disabled, cron=cron, run_on_startup_if_missed=startup)
    print(describe_schedule(config))


@app.command(name="parse-field")
def parse_field_cmd(
    field: Annotated[str, typer.Argument(help="One cron field, e.g. */15 or 1,3-5")],
    min_val: Annotated[int, typer.Option("--min", help="Lowest valid value")],
    max_val: Annotated[int, typer.Option("--max", help="Highest valid value")],
) -> None:
    """Expand a single cron field."""
    try:
        values = parse_field(field, min_val, max_val)
    except CronParseError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    print(",".join(str(v) for v in values))


@app.command()
def status(
    config: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config.json")] = None,
) -> None:
    """Show the configured scraping schedule."""
    s = get_scheduler_status(get_scheduling_config(config))

    table = Table()
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    for key, label in STATUS_LABELS.items():
        table.add_row(label, _format_value(s[key]))

    console.print(table)

    if not s["enabled"]:
        rprint("\n[dim]Set scheduling.enabled to true in config.json to turn on scheduled scraping.[/dim]")


if __name__ == "__main__":
    app()
