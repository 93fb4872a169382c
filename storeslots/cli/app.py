"""
Main CLI application using Typer.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.mock_store_client import MockStoreClient
from ..adapters.notifier import InMemoryNotifier
from ..adapters.preference_store import PreferenceStore
from ..adapters.store_api_client import StoreAPIClient
from ..adapters.timezone_provider import FixedTimezoneProvider, SystemTimezoneProvider
from ..config import AppConfig, get_default_config_path
from ..domain import presentation
from ..domain.models import Location, SelectionState
from ..domain.slot_generator import find_slot
from ..services.reminders import ReminderScheduler
from ..services.schedule_service import StoreScheduleService

app = typer.Typer(
    name="storeslots",
    help="Store opening hours, bookable time slots and opening reminders",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use packaged mock store data instead of the API.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show log output.")]
AltOption = Annotated[Optional[bool], typer.Option("--alt/--own", help="Display in the alternate city's timezone or your own. Defaults to the saved preference.")]


@dataclass
class _Context:
    config: AppConfig
    service: StoreScheduleService
    preferences: PreferenceStore
    location: Optional[Location]
    own_timezone: str


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    if config_file is None and not config_path.exists():
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _build_context(config_file: Optional[Path], mock: bool, verbose: bool) -> _Context:
    """Load configuration and fetch the current schedule snapshot."""
    _configure_logging(verbose)
    config = _load_config(config_file)

    override_year = config.override_year
    if override_year is None:
        override_year = pendulum.now(config.timezone).year
        console.print(f"[dim]override_year not configured, using {override_year}[/dim]")

    if mock:
        console.print("[yellow]⚠  MOCK MODE: using packaged store data[/yellow]")
        client = MockStoreClient()
    else:
        client = StoreAPIClient(
            base_url=config.api.base_url,
            timeout_seconds=config.api.timeout_seconds,
        )

    service = StoreScheduleService(client, timezone=config.timezone, override_year=override_year)
    service.refresh()
    if service.using_fallback:
        console.print("[yellow]⚠  Store data unavailable, showing default hours[/yellow]")

    provider = (
        FixedTimezoneProvider(config.viewer_timezone)
        if config.viewer_timezone
        else SystemTimezoneProvider()
    )
    location = config.get_location()
    preferences_file = config.preferences_file.expanduser() if config.preferences_file else None

    return _Context(
        config=config,
        service=service,
        preferences=PreferenceStore(preferences_file),
        location=location,
        own_timezone=presentation.viewer_timezone(location, provider),
    )


def _active(ctx: _Context, alt: Optional[bool]) -> tuple[str, str, SelectionState]:
    """Resolve (active timezone, city label, persisted state)."""
    state = ctx.preferences.load()
    use_alternative = state.use_alternative_timezone if alt is None else alt
    timezone = presentation.active_timezone(
        ctx.own_timezone,
        presentation.alternative_timezone(ctx.location),
        use_alternative,
    )
    city = presentation.active_city_name(ctx.location, use_alternative)
    return timezone, city, state


@app.command()
def status(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show whether the store is open right now.
    """
    try:
        ctx = _build_context(config_file, mock, verbose)
        now = pendulum.now("UTC")
        store_status = ctx.service.store_status(now)

        local_now = now.in_timezone(ctx.service.config.timezone)
        console.print(f"\nStore time: [bold]{local_now.format('ddd, MMM D h:mm A')}[/bold] ({ctx.service.config.timezone})")

        if store_status.is_open:
            console.print("[bold green]✓ The store is open[/bold green]\n")
        else:
            console.print("[bold red]✗ The store is closed[/bold red]")
            if store_status.next_opening:
                console.print(f"  Next opening: {store_status.next_opening}\n")
            else:
                console.print("  [yellow]No opening within the next week.[/yellow]\n")

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def slots(
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Date (YYYY-MM-DD). Defaults to today in the store's timezone.")] = None,
    select: Annotated[Optional[str], typer.Option("--select", help="Slot id to select and remember.")] = None,
    alt: AltOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List bookable 15-minute slots for a date.

    Examples:

        storeslots slots
        storeslots slots --date 2025-12-24 --alt
        storeslots slots --date 2025-12-24 --select 2025-12-24-10:15
    """
    try:
        ctx = _build_context(config_file, mock, verbose)
        timezone, _, state = _active(ctx, alt)

        if date:
            try:
                day = pendulum.from_format(date, "YYYY-MM-DD").date()
            except ValueError as e:
                console.print(f"[red]Could not parse date: {e}[/red]")
                raise typer.Exit(1)
        else:
            day = pendulum.now(ctx.service.config.timezone).date()

        selected_id = select or (state.selected_slot_id if state.selected_date == day else None)
        day_slots = ctx.service.time_slots(day, timezone, selected_id)

        if select:
            if find_slot(day_slots, select) is None:
                console.print(f"[red]Unknown slot id for {day.isoformat()}: {select}[/red]")
                raise typer.Exit(1)
            if not ctx.preferences.save(replace(state, selected_date=day, selected_slot_id=select)):
                console.print(f"[yellow]⚠ Could not save the selection to {ctx.preferences.preferences_file}[/yellow]")

        console.print()
        if not day_slots:
            console.print(f"[yellow]⚠ The store is closed on {day.isoformat()}.[/yellow]\n")
            return

        store_timezone = ctx.service.config.timezone
        noon = pendulum.datetime(day.year, day.month, day.day, 12, tz=store_timezone)
        table = Table(
            title=f"Slots for {presentation.format_date(noon, store_timezone)} "
                  f"(times in {presentation.timezone_display_name(timezone)})",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("", width=2)
        table.add_column("Time", style="bold yellow")
        table.add_column("Store time", style="dim")
        table.add_column("Slot ID", style="dim")

        for slot in day_slots:
            table.add_row(
                "✓" if slot.is_selected else "",
                slot.display_label,
                slot.time_string,
                slot.id,
            )

        console.print(table)
        console.print(f"\n[bold green]{len(day_slots)} slot(s)[/bold green]\n")

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def next_opening(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show the next opening and when its reminder would fire.
    """
    try:
        ctx = _build_context(config_file, mock, verbose)
        now = pendulum.now("UTC")

        opening = ctx.service.next_opening(now)
        if opening is None:
            console.print("\n[yellow]⚠ No opening within the next week.[/yellow]\n")
            return

        scheduler = ReminderScheduler(InMemoryNotifier())
        fire_at = scheduler.schedule_opening_reminder(ctx.service.config, now)

        if fire_at is not None:
            reminder_line = fire_at.in_timezone(ctx.own_timezone).format("ddd, MMM D h:mm A")
        else:
            reminder_line = "[yellow]too late to schedule[/yellow]"

        console.print(Panel.fit(
            f"[bold]Opening:[/bold] {opening}\n"
            f"[bold]Reminder:[/bold] {reminder_line}",
            title="Next opening"
        ))
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def greeting(
    alt: AltOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Print the greeting for the active timezone.
    """
    try:
        ctx = _build_context(config_file, mock, verbose)
        timezone, city, _ = _active(ctx, alt)

        console.print(f"\n[bold cyan]{presentation.greeting_at(pendulum.now('UTC'), timezone, city)}[/bold cyan]")
        console.print(f"[dim]{presentation.timezone_display_name(timezone)} ({timezone})[/dim]\n")

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def toggle_timezone(
    config_file: ConfigOption = None,
):
    """
    Switch between your own timezone and the alternate city's, and remember it.
    """
    try:
        config = _load_config(config_file)
        preferences_file = config.preferences_file.expanduser() if config.preferences_file else None
        store = PreferenceStore(preferences_file)
        was_alternative = store.load().use_alternative_timezone
        state = store.toggle_timezone()
        if state.use_alternative_timezone == was_alternative:
            console.print(f"[bold red]Error:[/bold red] Could not save preferences to {store.preferences_file}")
            raise typer.Exit(1)

        city = presentation.active_city_name(config.get_location(), state.use_alternative_timezone)
        mode = "alternate" if state.use_alternative_timezone else "own"
        console.print(f"\n[green]✓ Now using the {mode} timezone ({city}).[/green]\n")

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]storeslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
