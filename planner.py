#!/usr/bin/env python3
"""
Focus Planner - Command Line Interface
Ranks a work item snapshot and shows what to work on right now
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dateutil import parser as date_parser
from rich.console import Console

from focus_planner.core import Config, FallbackMode, load_work_items
from focus_planner.scheduler import FocusFormatter, Prioritizer, current_energy_level

# Initialize CLI app and console
app = typer.Typer(help="Focus Planner - what should I be doing right now?")

console = Console()

# Lazy-loaded Config (initialized on first use or by --config-dir)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or initialize the Config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def parse_now(now: Optional[str]) -> datetime:
    """
    Parse the --now option.

    Defaults to the local wall clock so the energy curve sees local hours.

    Raises:
        typer.BadParameter: if the timestamp cannot be parsed
    """
    if now is None:
        return datetime.now().astimezone()
    try:
        return date_parser.isoparse(now)
    except (ValueError, OverflowError):
        raise typer.BadParameter(f"Invalid ISO-8601 timestamp: {now}")


@app.callback()
def main(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help="Configuration directory"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Focus Planner - what should I be doing right now?"""
    global _config
    _config = Config(config_dir) if config_dir else None

    level = logging.DEBUG if debug else get_config().get_log_level()
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


@app.command()
def focus(
    items_file: Path = typer.Argument(..., help="JSON snapshot of work items"),
    now: Optional[str] = typer.Option(None, "--now", help="Current time (ISO-8601, defaults to local now)"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of suggestions"),
    fallback: Optional[FallbackMode] = typer.Option(None, "--fallback", help="Behaviour when nothing is shared"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show score breakdowns"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of panels"),
):
    """
    Show the work items that deserve attention right now

    Ranks by:
    - Time of day vs. required energy
    - Deadline urgency
    - Momentum (partial progress)
    - Stated priority
    - Open sub-items
    """
    prioritizer = Prioritizer(get_config(), fallback_mode=fallback)
    current = prioritizer.local_time(parse_now(now))
    try:
        items = load_work_items(items_file)
        entries = prioritizer.get_top_priorities(items, current, count)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading work items: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        payload = {
            "generated_at": current.isoformat(),
            "energy_level": current_energy_level(current.hour).value,
            "entries": [entry.as_dict() for entry in entries],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    formatter = FocusFormatter(console)
    formatter.render_focus(entries, current, verbose=verbose)


@app.command()
def explain(
    items_file: Path = typer.Argument(..., help="JSON snapshot of work items"),
    item_id: str = typer.Argument(..., help="ID of the item to explain"),
    now: Optional[str] = typer.Option(None, "--now", help="Current time (ISO-8601, defaults to local now)"),
):
    """Show the score breakdown and justification for one item"""
    prioritizer = Prioritizer(get_config())
    current = prioritizer.local_time(parse_now(now))
    try:
        items = load_work_items(items_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading work items: {e}[/red]")
        raise typer.Exit(1)

    match = next((item for item in items if str(item.id) == item_id), None)
    if match is None:
        console.print(f"[red]Work item {item_id} not found[/red]")
        raise typer.Exit(1)

    entry = prioritizer.score_item(match, current)
    formatter = FocusFormatter(console)
    console.print(formatter.format_breakdown(entry))
    console.print(f"[dim italic]{entry.justification}[/dim italic]")
    if not match.is_eligible():
        console.print("[yellow]Not eligible for focus: completed or no collaborators[/yellow]")


@app.command()
def energy(
    hour: Optional[int] = typer.Option(None, "--hour", help="Hour of day 0-23 (defaults to now)"),
):
    """Show the energy level for an hour of the day"""
    if hour is None:
        hour = Prioritizer(get_config()).local_time(datetime.now().astimezone()).hour
    level = current_energy_level(hour)
    console.print(f"{hour:02d}:00 energy: [bold]{level.value}[/bold]")


if __name__ == "__main__":
    app()
