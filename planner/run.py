# -*- coding: utf-8 -*-
import asyncio
import json
from dataclasses import asdict
from datetime import timedelta

import click
from loguru import logger
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from registry import list_tool_schemas
from timeline_server.models import CityTimeline
from timeline_server.server import timeline_for, timeline_to_view
from zonetime.cities import palette_color
from zonetime.formatting import format_duration
from zonetime.logger import configure_logging
from zonetime.models import EventWindow
from planner.utils import parse_city_options

console = Console()
error_console = Console(stderr=True)

GAP_STYLES = {
    "overlap": ("⚠️", "Overlap", "bold red"),
    "cooldown_risk": ("⏳", "Short break", "yellow"),
    "normal": ("✈️", "Break", "dim"),
}


def _rich_color(name: str) -> str:
    # palette names rich does not know
    return {
        "indigo": "blue",
        "mint": "bright_green",
        "teal": "cyan",
        "orange": "dark_orange",
        "pink": "hot_pink",
    }.get(name, name)


def create_timeline_table(view: CityTimeline, zones: dict[str, str]) -> Table:
    """Create a table with one row per city window or gap."""
    title = f"🕒 {view.event_name}" if view.event_name else "🕒 City Timeline"
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("", width=3)
    table.add_column("City", style="white")
    table.add_column(f"Time ({view.user_timezone})", style="yellow")
    table.add_column("Duration", style="cyan", justify="right")

    for item in view.items:
        if item.kind == "city":
            color = _rich_color(palette_color(zones.get(item.city_id, item.city_id)))
            table.add_row(
                Text("●", style=color),
                item.city_name,
                item.label,
                format_duration(timedelta(minutes=item.duration_minutes)),
            )
        else:
            icon, label, style = GAP_STYLES.get(item.gap_kind, GAP_STYLES["normal"])
            table.add_row(icon, Text(label, style=style), "", Text(item.label, style=style))

    return table


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("start", required=False)
@click.argument("end", required=False)
@click.option("--city", "cities", multiple=True, help='City as "Name=Area/Location", repeatable.')
@click.option("--global", "is_global_time", is_flag=True, help="Times are absolute (UTC) instead of local wall clock.")
@click.option("--user-tz", "user_tz", default="", help="Your IANA timezone (defaults to PZB_USER_TIMEZONE or TZ).")
@click.option("--name", "event_name", default="", help="Event name shown in the title.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging and print the raw timeline.")
@click.option("--list", "list_tools", is_flag=True, help="List all tool schemas without building a timeline.")
def main(
        start: str,
        end: str,
        cities: tuple[str, ...],
        is_global_time: bool,
        user_tz: str,
        event_name: str,
        verbose: bool,
        list_tools: bool,
) -> None:
    """Show when an event runs in each followed city, in your timezone.

    START/END: ISO datetimes. For local events (the default) their clock
    digits are the local time in every city, e.g. 2025-07-15T18:00:00.
    A trailing Z (2025-07-15T05:00:00Z) marks the event global.
    """
    configure_logging("DEBUG" if verbose else None)

    # If list option is specified, display tool schemas and exit
    if list_tools:
        schemas = asyncio.run(list_tool_schemas())
        console.print(JSON(json.dumps(schemas, indent=2)))
        return

    if not start or not end:
        error_console.print("[red]Error:[/red] Provide START and END datetimes.")
        raise SystemExit(1)
    if not cities:
        error_console.print("[red]Error:[/red] Provide at least one --city.")
        raise SystemExit(1)

    city_inputs = parse_city_options(cities)
    try:
        window = EventWindow.from_feed(start, end, name=event_name)
        is_global_time = is_global_time or window.is_global_time
        timeline = timeline_for(start, end, is_global_time, city_inputs, user_tz, event_name)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if timeline is None:
        console.print("[yellow]No timeline available for the selected cities.[/yellow]")
        return

    view = timeline_to_view(timeline, event_name)
    logger.debug("Built timeline with {} item(s)", len(view.items))
    if verbose:
        console.print(Panel(JSON(json.dumps(asdict(view), indent=2)),
                            title="📄 Timeline", border_style="blue"))

    zones = {city.id: city.timezone for city in city_inputs}
    console.print(create_timeline_table(view, zones))

    stats_text = Text()
    stats_text.append("Total span: ", style="white")
    stats_text.append(format_duration(timedelta(minutes=view.total_duration_minutes)), style="bold green")
    stats_text.append("\n")
    stats_text.append("Active play: ", style="white")
    stats_text.append(format_duration(timedelta(minutes=view.play_duration_minutes)), style="bold green")
    if view.overlap_count:
        stats_text.append("\n")
        stats_text.append(f"Overlaps: {view.overlap_count}", style="bold red")
    if view.cooldown_risk_count:
        stats_text.append("\n")
        stats_text.append(f"Short breaks: {view.cooldown_risk_count}", style="yellow")
    console.print(Panel(stats_text, title="📊 Statistics", border_style="green"))


if __name__ == "__main__":
    main()
