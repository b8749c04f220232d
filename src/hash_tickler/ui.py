from datetime import timedelta
from typing import Optional

from rich.console import Group
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from hash_tickler.progress_queue import SingleSlotQueue
from hash_tickler.progress_snapshot import ProgressSnapshot


COLORS = {
    "last": "bold yellow",
    "count": "cyan",
    "rate": "spring_green2",
    "time": "turquoise2",
}


def format_duration(seconds: float) -> str:
    return str(timedelta(seconds=int(seconds)))


def format_eta(state: ProgressSnapshot) -> str:
    """Time left at the current rate, or ? before the rate is known."""
    if state.rate <= 0:
        return "?"
    return format_duration(state.remaining / state.rate)


def render(state: Optional[ProgressSnapshot], title: str = "Cracking"):
    """Render the latest progress snapshot."""
    if state is None:
        return Panel("Waiting for first update…", title=title, border_style="dim")

    stats = Table.grid(padding=(0, 2))
    stats.add_column(justify="right", style="dim")
    stats.add_column()
    stats.add_row("Last tried", f"[{COLORS['last']}]{state.last}[/{COLORS['last']}]")
    stats.add_row("Tried", f"[{COLORS['count']}]{state.tried:,}[/{COLORS['count']}] / {state.total:,}")
    stats.add_row("Remaining", f"[{COLORS['count']}]{state.remaining:,}[/{COLORS['count']}]")
    stats.add_row("Rate", f"[{COLORS['rate']}]{state.rate:,.0f}/s[/{COLORS['rate']}]")
    stats.add_row("Elapsed", f"[{COLORS['time']}]{format_duration(state.elapsed)}[/{COLORS['time']}]")
    stats.add_row("ETA", f"[{COLORS['time']}]{format_eta(state)}[/{COLORS['time']}]")

    bar = ProgressBar(total=state.total, completed=state.tried, width=48)
    return Panel(Group(bar, f"{state.percent:6.2f}%", stats), title=title, padding=(1, 1))


def ui_loop(progress_queue: SingleSlotQueue[ProgressSnapshot], title: str = "Cracking") -> None:
    """Render snapshots until the queue is closed."""
    with Live(render(None, title), refresh_per_second=4, screen=False) as live:
        while True:
            state = progress_queue.get()
            if state is None:
                break
            live.update(render(state, title))
