"""
Main CLI application using Typer.
"""

import logging
from datetime import date, time
from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.static_availability import StaticAvailabilitySource
from ..config import AppConfig, StrategyName, get_default_config_path
from ..domain.exceptions import DomainError, to_error_body
from ..domain.models import OfferWindow
from ..domain.slot_strategies import DEFAULT_INTERVAL_MINUTES
from ..services.availability import AvailabilityService
from ..services.strategy_resolver import StrategyResolver, build_strategy

app = typer.Typer(
    name="clinicslots",
    help="Generate bookable appointment slots from practitioner availability",
    add_completion=False
)

console = Console()


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Generate bookable appointment slots from practitioner availability.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_date(value: str) -> date:
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as e:
        raise typer.BadParameter(f"Invalid date '{value}', expected YYYY-MM-DD: {e}")


def _parse_time(value: str) -> time:
    try:
        return time.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid time '{value}', expected HH:MM: {e}")


def _print_slots(slots: List[DateTime], duration: int, title: str) -> None:
    if not slots:
        console.print("[yellow]⚠ No slots available.[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Start", style="bold yellow")
    table.add_column("End")

    for idx, slot in enumerate(slots, 1):
        table.add_row(
            str(idx),
            slot.format("YYYY-MM-DD HH:mm"),
            slot.add(minutes=duration).format("HH:mm"),
        )

    console.print(table)
    console.print(f"[bold green]✓ {len(slots)} slot(s)[/bold green]")


def _describe(strategy) -> str:
    interval = getattr(strategy, "interval_minutes", None)
    if interval is None:
        return "dynamic"
    return f"every {interval} min"


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


@app.command()
def generate(
    day: Annotated[str, typer.Option("--date", help="Block date (YYYY-MM-DD)")],
    start: Annotated[str, typer.Option("--start", help="Block start (HH:MM)")],
    end: Annotated[str, typer.Option("--end", help="Block end (HH:MM)")],
    duration: Annotated[int, typer.Option("--duration", "-d", help="Service duration in minutes")],
    strategy: Annotated[StrategyName, typer.Option("--strategy", "-s", help="Slot strategy")] = StrategyName.FIXED_INTERVAL,
    interval: Annotated[int, typer.Option("--interval", help="Cadence for fixed_interval in minutes")] = DEFAULT_INTERVAL_MINUTES,
):
    """
    Run one strategy over a single availability block.

    Examples:

        clinicslots generate --date 2024-01-01 --start 08:00 --end 12:00 -d 45

        clinicslots generate --date 2024-01-01 --start 08:00 --end 12:00 -d 45 -s dynamic_duration
    """
    block_date = _parse_date(day)
    block_start = _parse_time(start)
    block_end = _parse_time(end)

    try:
        generator = build_strategy(strategy, interval)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    slots = generator.generate_theoretical_slots(block_date, block_start, block_end, duration)
    _print_slots(slots, duration, title=f"{strategy.value} slots")


@app.command()
def availability(
    practitioner: Annotated[str, typer.Argument(help="Practitioner id from the config file")],
    day: Annotated[str, typer.Option("--date", help="Requested date (YYYY-MM-DD)")],
    service: Annotated[Optional[str], typer.Option("--service", help="Service id used for policy overrides")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Service duration in minutes")] = None,
    offer_start: Annotated[Optional[str], typer.Option("--offer-start", help="First bookable date of the offer")] = None,
    offer_end: Annotated[Optional[str], typer.Option("--offer-end", help="Last bookable date of the offer")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
):
    """
    List bookable slots for a configured practitioner on one day.
    """
    try:
        config = _load_config(config_file)
        requested_date = _parse_date(day)
        service_duration = duration if duration is not None else config.defaults.service_duration_minutes

        offer_window = None
        if offer_start or offer_end:
            if not (offer_start and offer_end):
                console.print("[red]Error: --offer-start and --offer-end must be used together.[/red]")
                raise typer.Exit(1)
            offer_window = OfferWindow(
                start_date=_parse_date(offer_start),
                end_date=_parse_date(offer_end),
            )

        service_layer = AvailabilityService(
            availability_source=StaticAvailabilitySource(config),
            resolver=StrategyResolver(config.slot_policy),
        )
        slots = service_layer.generate_available_slots(
            practitioner_id=practitioner,
            service_id=service,
            requested_date=requested_date,
            service_duration=service_duration,
            offer_window=offer_window,
        )
        _print_slots(slots, service_duration, title=f"Slots for {practitioner} on {requested_date}")

    except DomainError as e:
        body = to_error_body(e, path=f"availability/{practitioner}")
        console.print(f"[bold red]{body.status} {body.error}:[/bold red] {body.message}")
        raise typer.Exit(1)

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def practitioners(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured practitioners and their availability blocks.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not config.practitioners:
        console.print("[yellow]No practitioners defined in the config file.[/yellow]")
        return

    resolver = StrategyResolver(config.slot_policy)

    table = Table(
        title="Configured practitioners",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Id", style="bold yellow", no_wrap=True)
    table.add_column("Name")
    table.add_column("Strategy", style="dim", no_wrap=True)
    table.add_column("Blocks")

    for practitioner in config.practitioners:
        blocks = ", ".join(
            f"{b.date} {b.start.strftime('%H:%M')}-{b.end.strftime('%H:%M')}"
            for b in practitioner.blocks
        ) or "-"
        table.add_row(
            practitioner.id,
            practitioner.display_name(),
            _describe(resolver.resolve(practitioner.id)),
            blocks,
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]clinicslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
