"""
Main CLI application using Typer.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional, Tuple

import pendulum
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters import create_store
from ..config import AppConfig, get_default_config_path
from ..domain.collaborator_schedule import (
    format_work_schedule_summary,
    validate_work_schedule,
)
from ..domain.exceptions import SchedulingError
from ..services.availability_service import AvailabilityService

app = typer.Typer(
    name="salonslots",
    help="Compute appointment slots and check collaborator availability",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
DurationOption = Annotated[
    Optional[int],
    typer.Option("--duration", "-d", min=1, help="Service duration in minutes"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    Salon appointment availability engine.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _load(config_file: Optional[Path]) -> Tuple[AppConfig, AvailabilityService]:
    config = AppConfig.load_from_yaml(config_file or get_default_config_path())
    store = create_store(config.data_source)
    return config, AvailabilityService(store, config.defaults)


def _parse_date(value: Optional[str], tz: str) -> date:
    """Parse ``YYYY-MM-DD``; no value means today in the configured timezone."""
    if not value:
        return pendulum.today(tz).date()

    try:
        return pendulum.from_format(value, "YYYY-MM-DD", tz=tz).date()
    except ValueError as e:
        console.print(f"[red]Could not parse date {escape(repr(value))}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _print_slots(slots, title: str) -> None:
    console.print()
    if not slots:
        console.print(f"[yellow]⚠ No available slots {title}.[/yellow]\n")
        return

    console.print(f"[bold green]✓ {len(slots)} available slot(s) {title}:[/bold green]\n")
    console.print("  " + "  ".join(slots))
    console.print()


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


@app.command()
def slots(
    day: Annotated[Optional[str], typer.Argument(help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    duration: DurationOption = None,
    config_file: ConfigOption = None,
):
    """
    List start times offered by the business operating hours on a date.
    """
    try:
        config, service = _load(config_file)
        target = _parse_date(day, config.timezone)
        result = service.business_slots(target, service_duration=duration)
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    _print_slots(result, f"on {target.isoformat()}")


@app.command("collaborator-slots")
def collaborator_slots(
    collaborator: Annotated[str, typer.Argument(help="Collaborator id")],
    day: Annotated[Optional[str], typer.Argument(help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    duration: DurationOption = None,
    config_file: ConfigOption = None,
):
    """
    List conflict-free start times for a collaborator on a date.
    """
    try:
        config, service = _load(config_file)
        target = _parse_date(day, config.timezone)
        result = service.collaborator_slots(collaborator, target, service_duration=duration)
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    _print_slots(result, f"for {collaborator} on {target.isoformat()}")


@app.command()
def check(
    collaborator: Annotated[str, typer.Argument(help="Collaborator id")],
    day: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    time: Annotated[str, typer.Argument(help="Start time (HH:MM)")],
    duration: DurationOption = None,
    config_file: ConfigOption = None,
):
    """
    Check whether a collaborator can be booked at a date and time.

    Exits with status 1 when the slot is not available.
    """
    try:
        config, service = _load(config_file)
        target = _parse_date(day, config.timezone)
        result = service.check_availability(collaborator, target, time, service_duration=duration)
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    if result.available:
        console.print(f"[green]✓ {collaborator} is available on {target.isoformat()} at {time}[/green]")
        return

    console.print(f"[yellow]✗ Not available:[/yellow] {escape(result.reason)}")
    raise typer.Exit(1)


@app.command("validate-schedule")
def validate_schedule(
    collaborator: Annotated[str, typer.Argument(help="Collaborator id")],
    config_file: ConfigOption = None,
):
    """
    Validate a collaborator's stored working week.
    """
    try:
        config = AppConfig.load_from_yaml(config_file or get_default_config_path())
        store = create_store(config.data_source)
        work_schedule = store.get_work_schedule(collaborator)
        result = validate_work_schedule(work_schedule)
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    table = Table(title=f"Working week of {collaborator}", show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold yellow")
    table.add_column("Enabled")
    table.add_column("Hours", style="dim")

    for day in work_schedule:
        hours = f"{day.start_time}-{day.end_time}" if day.start_time or day.end_time else "-"
        table.add_row(day.day.value.capitalize(), "yes" if day.enabled else "no", hours)

    console.print()
    console.print(table)
    console.print()

    if not result.valid:
        console.print(f"[bold red]✗ Invalid schedule:[/bold red] {result.error}")
        raise typer.Exit(1)

    console.print("[green]✓ Schedule is valid[/green]")


@app.command()
def summary(
    collaborator: Annotated[str, typer.Argument(help="Collaborator id")],
    config_file: ConfigOption = None,
):
    """
    Show a one-line summary of a collaborator's working week.
    """
    try:
        config = AppConfig.load_from_yaml(config_file or get_default_config_path())
        store = create_store(config.data_source)
        line = format_work_schedule_summary(store.get_collaborator_schedule(collaborator))
    except (FileNotFoundError, ValueError, SchedulingError) as e:
        _fail(e)

    console.print(line)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]salonslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
