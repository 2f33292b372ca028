"""
Rich formatter module for Focus Planner.

Renders the ranked focus suggestions as terminal panels.
"""

from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from focus_planner.core.models import EnergyLevel, Priority, RankedEntry, WorkItem
from focus_planner.scheduler.energy import current_energy_level
from focus_planner.scheduler.prioritizer import WEIGHTS
from focus_planner.scheduler.signals import hours_until_due


# Priority colors
PRIORITY_COLORS = {
    Priority.URGENT: "red bold",
    Priority.HIGH: "yellow",
    Priority.MEDIUM: "white",
    Priority.LOW: "dim",
}

ENERGY_ICONS = {
    EnergyLevel.HIGH: "[green]▲ high[/green]",
    EnergyLevel.MEDIUM: "[yellow]■ medium[/yellow]",
    EnergyLevel.LOW: "[blue]▼ low[/blue]",
}

SIGNAL_LABELS = {
    "time_energy": "Time/Energy",
    "deadline_urgency": "Deadline",
    "momentum": "Momentum",
    "priority": "Priority",
    "dependency": "Dependencies",
}


class FocusFormatter:
    """
    Rich-based formatter for focus suggestions.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize formatter.

        Args:
            console: Rich Console instance (creates default if not provided)
        """
        self.console = console or Console()

    def _format_priority(self, priority: Priority) -> str:
        """Format priority as colored badge."""
        color = PRIORITY_COLORS.get(priority, "white")
        return f"[{color}]{priority.value}[/{color}]"

    def _format_due(self, item: WorkItem, now: datetime) -> str:
        """Format deadline relative to now, colored by urgency."""
        hours = hours_until_due(item, now)
        if hours is None:
            return "[dim]---[/dim]"

        if hours < 0:
            overdue = abs(hours)
            if overdue < 24:
                return f"[red bold]{overdue:.0f}h overdue[/red bold]"
            return f"[red bold]{overdue / 24:.0f}d overdue[/red bold]"
        elif hours < 8:
            return f"[yellow bold]in {hours:.1f}h[/yellow bold]"
        elif hours < 48:
            return f"[yellow]in {hours:.0f}h[/yellow]"
        return f"[dim]{item.due_at.strftime('%b %d')}[/dim]"

    def _get_greeting(self, now: datetime) -> str:
        """Greeting for the time of day."""
        hour = now.hour

        if hour < 12:
            return "Good Morning!"
        elif hour < 17:
            return "Good Afternoon!"
        elif hour < 21:
            return "Good Evening!"
        else:
            return "Good Night!"

    def format_header(self, now: datetime) -> Panel:
        """
        Create header panel with greeting and current energy level.

        Args:
            now: Moment the suggestions were computed for

        Returns:
            Rich Panel with header content
        """
        energy = current_energy_level(now.hour)
        content = Text()
        content.append(f"{self._get_greeting(now)}\n", style="bold")
        content.append(now.strftime("%A, %B %d, %Y %H:%M"), style="dim")
        content.append("\nEnergy: ")
        content.append_text(Text.from_markup(ENERGY_ICONS[energy]))

        return Panel(
            content,
            title="[bold]Focus Now[/bold]",
            title_align="center",
            border_style="blue",
            padding=(0, 2),
        )

    def format_focus(self, entries: List[RankedEntry], now: datetime) -> Panel:
        """
        Create panel showing the ranked suggestions.

        Args:
            entries: Ranked entries, best first
            now: Moment the suggestions were computed for

        Returns:
            Rich Panel with the suggestion list
        """
        if not entries:
            content = Text.from_markup("[dim]Nothing to do right now[/dim]", justify="center")
            return Panel(
                content,
                title="[bold]What should I be doing?[/bold]",
                border_style="green",
                padding=(0, 1),
            )

        table = Table(
            show_header=False,
            box=None,
            padding=(0, 1),
            expand=True,
        )
        table.add_column("#", width=3)
        table.add_column("Title", ratio=1)
        table.add_column("Due", width=14, justify="right")
        table.add_column("Priority", width=8, justify="right")
        table.add_column("Score", width=6, justify="right")

        for i, entry in enumerate(entries, 1):
            item = entry.item
            title = item.title[:40] + "..." if len(item.title) > 40 else item.title
            table.add_row(
                f"[bold]{i}.[/bold]",
                title,
                self._format_due(item, now),
                self._format_priority(item.priority),
                f"[bold]{entry.total_score:.0f}[/bold]",
            )
            table.add_row("", f"[dim italic]{entry.justification}[/dim italic]", "", "", "")

        subtitle = None
        if any(entry.is_fallback for entry in entries):
            subtitle = "[dim]no shared tasks - showing personal tasks[/dim]"

        return Panel(
            table,
            title="[bold]What should I be doing?[/bold]",
            subtitle=subtitle,
            border_style="green",
            padding=(0, 1),
        )

    def format_breakdown(self, entry: RankedEntry) -> Panel:
        """
        Create table with the per-signal breakdown of one entry.

        Args:
            entry: Ranked entry to explain

        Returns:
            Rich Panel with score, weight and contribution per signal
        """
        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Signal")
        table.add_column("Score", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("Weighted", justify="right")

        weighted = entry.breakdown.weighted(WEIGHTS)
        for name, score in entry.breakdown.as_dict().items():
            table.add_row(
                SIGNAL_LABELS[name],
                f"{score:.0f}",
                f"{WEIGHTS[name]:.2f}",
                f"{weighted[name]:.1f}",
            )
        table.add_row("[bold]Total[/bold]", "", "", f"[bold]{entry.total_score:.1f}[/bold]")

        return Panel(
            table,
            title=f"[bold]#{entry.item.id} {entry.item.title}[/bold]",
            border_style="magenta",
            padding=(0, 1),
        )

    def render_focus(
        self,
        entries: List[RankedEntry],
        now: datetime,
        verbose: bool = False
    ) -> None:
        """
        Render the focus view to console.

        Args:
            entries: Ranked entries, best first
            now: Moment the suggestions were computed for
            verbose: Also show the score breakdown of each entry
        """
        self.console.print(self.format_header(now))
        self.console.print()

        self.console.print(self.format_focus(entries, now))

        if verbose:
            for entry in entries:
                self.console.print()
                self.console.print(self.format_breakdown(entry))
