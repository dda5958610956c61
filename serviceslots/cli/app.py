"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from pendulum import DateTime
from pendulum.tz.timezone import Timezone
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..config import AppConfig
from ..domain.day_window import DayWindowGenerator
from ..domain.exceptions import SlotEngineError
from ..domain.models import CalendarDay, SlotSelection, TimeSlot
from ..domain.nearest_slot import NearestSlotResolver
from ..domain.slot_generator import SlotGenerator
from ..services.slot_picker import SlotPicker

app = typer.Typer(
    name="serviceslots",
    help="Generate bookable service slots for today and the next days",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
NowOption = Annotated[Optional[str], typer.Option("--now", help="Reference time, e.g. 2025-07-12T18:30. Defaults to the current time.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Slot engine command line.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    try:
        return AppConfig.load_or_default(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _resolve_now(now_option: Optional[str], zone: Timezone) -> DateTime:
    """
    Parse the --now option in the configured timezone, or read the clock.
    """
    if not now_option:
        return pendulum.now(zone)

    try:
        parsed = pendulum.parse(now_option, tz=zone)
    except ValueError as e:
        console.print(f"[red]Could not parse --now '{now_option}': {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(parsed, DateTime):
        console.print(f"[red]Could not parse --now '{now_option}': not a date and time[/red]")
        raise typer.Exit(1)

    return parsed.in_timezone(zone)


def _days_table(days: List[CalendarDay], title: str = "Available days") -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim")
    table.add_column("Date", style="bold yellow")
    table.add_column("Day")
    table.add_column("")

    for idx, day in enumerate(days, 1):
        table.add_row(
            str(idx),
            day.full_date,
            str(day),
            "[green]★ Best[/green]" if day.is_recommended else "",
        )

    return table


def _print_slots(day: CalendarDay, slots: List[TimeSlot]) -> None:
    if not slots:
        console.print(
            f"[yellow]⚠ No slots available on {day.full_date}.[/yellow]\n"
            "Try selecting another day."
        )
        return

    console.print(f"[bold green]✓ {len(slots)} slot(s) on {day.full_date}:[/bold green]")
    for idx, slot in enumerate(slots, 1):
        console.print(f"  {idx:>2}. {slot.display_time} ({slot.iso_time})")


def _print_selection(selection: SlotSelection, title: str) -> None:
    console.print(Panel.fit(
        f"[bold]Day:[/bold] {selection.day} ({selection.day.full_date})\n"
        f"[bold]Time:[/bold] {selection.slot.display_time}\n"
        f"[bold]Booking:[/bold] {selection.combined_label}",
        title=title
    ))


@app.command()
def days(
    config_file: ConfigOption = None,
    now: NowOption = None,
    horizon: Annotated[Optional[int], typer.Option("--horizon", help="Number of days to show")] = None,
    cutoff_shift: Annotated[Optional[bool], typer.Option("--cutoff-shift/--no-cutoff-shift", help="Start tomorrow once the cutoff hour has passed")] = None,
):
    """
    List the days offered by the day picker.
    """
    config = _load_config(config_file)
    reference = _resolve_now(now, config.get_zone())

    generator = DayWindowGenerator(
        config=config.business_hours.to_business_hours(),
        cutoff_shift=config.cutoff_shift if cutoff_shift is None else cutoff_shift,
    )

    try:
        day_list = generator.generate_days(
            reference, config.horizon_days if horizon is None else horizon
        )
    except SlotEngineError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print()
    console.print(_days_table(day_list))
    console.print()


@app.command()
def slots(
    config_file: ConfigOption = None,
    now: NowOption = None,
    day: Annotated[Optional[str], typer.Option("--day", help="Day (YYYY-MM-DD). Defaults to today.")] = None,
):
    """
    List the bookable slots of a day.
    """
    config = _load_config(config_file)
    reference = _resolve_now(now, config.get_zone())

    if day:
        try:
            target = pendulum.from_format(day, "YYYY-MM-DD", tz=reference.timezone)
        except ValueError as e:
            console.print(f"[red]Could not parse day '{day}': {e}[/red]")
            raise typer.Exit(1)
    else:
        target = reference

    calendar_day = CalendarDay.from_datetime(target)
    generator = SlotGenerator(config=config.business_hours.to_business_hours())

    console.print()
    _print_slots(calendar_day, generator.generate_slots(calendar_day, reference))
    console.print()


@app.command()
def nearest(
    config_file: ConfigOption = None,
    now: NowOption = None,
):
    """
    Show the nearest bookable slot.
    """
    config = _load_config(config_file)
    reference = _resolve_now(now, config.get_zone())

    resolver = NearestSlotResolver(config=config.nearest_slot_hours.to_business_hours())
    selection = resolver.resolve_nearest(reference)

    console.print()
    _print_selection(selection, title="Nearest available time")
    console.print()


def _prompt_index(label: str, count: int) -> int:
    """Ask for a 1-based list position and return it 0-based."""
    while True:
        choice = typer.prompt(label, default=1, type=int)
        if 1 <= choice <= count:
            return choice - 1
        console.print(f"[yellow]Please enter a number between 1 and {count}.[/yellow]")


@app.command()
def pick(
    config_file: ConfigOption = None,
    now: NowOption = None,
):
    """
    Pick a day and a start time interactively.
    """
    config = _load_config(config_file)
    reference = _resolve_now(now, config.get_zone())

    picker = SlotPicker(
        config=config.business_hours.to_business_hours(),
        horizon_days=config.horizon_days,
        clock=lambda: reference,
        cutoff_shift=config.cutoff_shift,
    )

    try:
        day_list = picker.load_days()

        console.print("\n[bold]1️⃣  Select date[/bold]")
        console.print(_days_table(day_list))

        while True:
            day_idx = _prompt_index("→ Day", len(day_list))
            slot_list = picker.choose_day(day_list[day_idx])
            if slot_list:
                break
            _print_slots(day_list[day_idx], slot_list)

        console.print("\n[bold]2️⃣  Start time[/bold]")
        _print_slots(picker.selected_day, slot_list)
        slot_idx = _prompt_index("→ Slot", len(slot_list))
        picker.select_slot(slot_list[slot_idx])

        selection = picker.confirm()
    except SlotEngineError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print()
    _print_selection(selection, title="✓ Slot confirmed")
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]serviceslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
