"""
Main CLI application using Typer.
"""

import logging
from datetime import time
from pathlib import Path
from typing import List, Optional, Annotated, Sequence, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import EngineConfig, get_default_config_path
from ..domain.exceptions import ChronoRangeError, MalformedInputError
from ..domain.models import DailyWindow, SlotConstraints, TimeRange
from ..services.temporal_engine import TemporalEngine

app = typer.Typer(
    name="chronorange",
    help="Compute recurrences, range splits, business days and appointment slots",
    add_completion=False
)

console = Console()

RANGE_SEPARATOR = ".."


def _load_engine(config_file: Optional[Path]) -> TemporalEngine:
    """
    Build the engine from an explicit config file, the default config file,
    or built-in defaults when no default file exists.
    """
    if config_file is not None:
        return TemporalEngine(EngineConfig.load_from_yaml(config_file))

    config_path = get_default_config_path()
    if config_path.exists():
        return TemporalEngine(EngineConfig.load_from_yaml(config_path))

    return TemporalEngine()


def _engine(ctx: typer.Context) -> TemporalEngine:
    try:
        return _load_engine(ctx.obj["config_file"])
    except (FileNotFoundError, ValueError) as e:
        _fail(e)


def _fail(error: Exception):
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _parse_range_argument(value: str) -> Tuple[str, str]:
    """Split a ``START..END`` argument into its endpoints."""
    start, separator, end = value.partition(RANGE_SEPARATOR)
    if not separator or not start or not end:
        raise MalformedInputError(f"Range must look like START{RANGE_SEPARATOR}END, got '{value}'")
    return start, end


def _print_ranges(title: str, ranges: Sequence[TimeRange]) -> None:
    if not ranges:
        console.print(f"[yellow]⚠ {title}: no results.[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Start", style="bold yellow")
    table.add_column("End")
    table.add_column("Minutes", justify="right")

    for idx, time_range in enumerate(ranges, 1):
        table.add_row(
            str(idx),
            time_range.start.to_iso8601_string(),
            time_range.end.to_iso8601_string(),
            f"{time_range.duration_minutes():g}",
        )

    console.print(table)


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./chronorange.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Temporal range computations on the command line.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config_file": config_file}


@app.command()
def recur(
    ctx: typer.Context,
    start: Annotated[str, typer.Argument(help="First occurrence (ISO date or datetime)")],
    end: Annotated[str, typer.Argument(help="Last possible occurrence")],
    unit: Annotated[str, typer.Option("--unit", "-u", help="Step unit (day, week, month, ...)")] = "day",
    every: Annotated[int, typer.Option("--every", "-e", help="Units between occurrences")] = 1,
    tz: Annotated[Optional[str], typer.Option("--tz", help="IANA timezone")] = None,
):
    """
    List the occurrences of a recurring event.

    Example:

        chronorange recur 2025-06-10 2025-06-20 --unit day --every 2
    """
    engine = _engine(ctx)
    try:
        occurrences = engine.recurrences(start=start, end=end, unit=unit, interval_value=every, timezone=tz)
    except ChronoRangeError as e:
        _fail(e)

    if not occurrences:
        console.print("[yellow]⚠ No occurrences in this range.[/yellow]")
        return

    console.print(f"[bold green]✓ {len(occurrences)} occurrence(s):[/bold green]")
    for occurrence in occurrences:
        console.print(f"  {occurrence.to_iso8601_string()}")


@app.command()
def intersect(
    ctx: typer.Context,
    first: Annotated[str, typer.Argument(help="First range as START..END")],
    second: Annotated[str, typer.Argument(help="Second range as START..END")],
):
    """
    Show the overlap of two ranges.
    """
    engine = _engine(ctx)
    try:
        result = engine.intersect(_parse_range_argument(first), _parse_range_argument(second))
    except ChronoRangeError as e:
        _fail(e)

    if result is None:
        console.print("[yellow]⚠ The ranges do not intersect.[/yellow]")
        return

    _print_ranges("Intersection", [result])


@app.command()
def split(
    ctx: typer.Context,
    time_range: Annotated[str, typer.Argument(help="Range as START..END")],
    unit: Annotated[str, typer.Option("--unit", "-u", help="Chunk unit")] = "day",
    size: Annotated[int, typer.Option("--size", "-s", help="Units per chunk")] = 1,
):
    """
    Split a range into unit-aligned chunks.
    """
    engine = _engine(ctx)
    try:
        chunks = engine.split(_parse_range_argument(time_range), unit, size)
    except ChronoRangeError as e:
        _fail(e)

    _print_ranges("Chunks", chunks)


@app.command()
def aggregate(
    ctx: typer.Context,
    ranges: Annotated[List[str], typer.Argument(help="Ranges as START..END")],
    unit: Annotated[str, typer.Option("--unit", "-u", help="Result unit")] = "hour",
):
    """
    Sum the durations of several ranges.
    """
    engine = _engine(ctx)
    try:
        total = engine.aggregate([_parse_range_argument(value) for value in ranges], unit)
    except ChronoRangeError as e:
        _fail(e)

    console.print(f"[bold green]Total:[/bold green] {total:g} {unit}")


@app.command("next-business-day")
def next_business_day(
    ctx: typer.Context,
    date: Annotated[str, typer.Argument(help="Reference date")],
    holiday: Annotated[Optional[List[str]], typer.Option("--holiday", "-H", help="Additional holiday (repeatable)")] = None,
):
    """
    Find the first business day after a date.
    """
    engine = _engine(ctx)
    try:
        result = engine.next_business_day(date, holiday or [])
    except ChronoRangeError as e:
        _fail(e)

    console.print(f"[bold green]Next business day:[/bold green] {result.format('dddd, YYYY-MM-DD')}")


@app.command()
def slots(
    ctx: typer.Context,
    start: Annotated[str, typer.Argument(help="Start of the scheduling range")],
    end: Annotated[str, typer.Argument(help="End of the scheduling range")],
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot length in minutes")] = None,
    exclude: Annotated[Optional[List[int]], typer.Option("--exclude", "-x", help="Excluded weekday, 0=Sunday (repeatable)")] = None,
    window_start: Annotated[Optional[str], typer.Option("--window-start", help="Daily window start (HH:MM)")] = None,
    window_end: Annotated[Optional[str], typer.Option("--window-end", help="Daily window end (HH:MM)")] = None,
    tz: Annotated[Optional[str], typer.Option("--tz", help="IANA timezone")] = None,
):
    """
    Generate bookable appointment slots.

    Examples:

        chronorange slots 2025-06-10 2025-06-12T23:59 -d 30 -x 0 -x 6 --window-start 09:00 --window-end 17:00
    """
    engine = _engine(ctx)
    defaults = engine.config.slots

    try:
        constraints = SlotConstraints(
            excluded_weekdays=frozenset(exclude or defaults.exclude_weekdays),
            daily_window=DailyWindow(
                start=time.fromisoformat(window_start) if window_start else defaults.window_start,
                end=time.fromisoformat(window_end) if window_end else defaults.window_end,
            ),
        )
        result = engine.slots(
            start=start,
            end=end,
            slot_duration_minutes=duration,
            constraints=constraints,
            timezone=tz,
        )
    except (ChronoRangeError, ValueError) as e:
        _fail(e)

    _print_ranges("Slots", result)


@app.command()
def convert(
    ctx: typer.Context,
    instants: Annotated[List[str], typer.Argument(help="Instants to convert")],
    to: Annotated[str, typer.Option("--to", "-t", help="Target IANA timezone")],
    fmt: Annotated[Optional[str], typer.Option("--format", "-f", help="Output pattern (pendulum tokens)")] = None,
):
    """
    Reformat instants in another timezone. Unparsable instants are skipped.
    """
    engine = _engine(ctx)
    try:
        converted = engine.convert(instants, to, fmt)
    except ChronoRangeError as e:
        _fail(e)

    skipped = len(instants) - len(converted)
    for line in converted:
        console.print(f"  {line}")
    if skipped:
        console.print(f"[yellow]⚠ {skipped} instant(s) could not be parsed and were skipped.[/yellow]")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]chronorange[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
