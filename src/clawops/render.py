"""Console tables for cleanup and status results."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

from clawops.status.notes import NO_MEMORY_DIR, NO_MEMORY_FILES, NO_NOTES

if TYPE_CHECKING:
    from clawops.memory.cleanup import AnalysisResult
    from clawops.status import AgentStatus

_UNITS = ["B", "KB", "MB", "GB", "TB"]

_NOTES_PLACEHOLDER = {
    NO_MEMORY_DIR: "No memory dir",
    NO_MEMORY_FILES: "No memory files",
    NO_NOTES: "No notes",
}


def format_bytes(size: int) -> str:
    """Human-readable size: '0 B', '512 B', '1.5 KB', '12 MB'."""
    if size <= 0:
        return "0 B"
    exp = 0
    value = float(size)
    while value >= 1024 and exp < len(_UNITS) - 1:
        value /= 1024
        exp += 1
    if value >= 10 or exp == 0:
        return f"{value:.0f} {_UNITS[exp]}"
    return f"{value:.1f} {_UNITS[exp]}"


def format_date(ms: int | None) -> str:
    """UTC YYYY-MM-DD, or '-' when there is no date."""
    if ms is None:
        return "-"
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d")


def format_age(ms: int, now_ms: int) -> str:
    diff = max(now_ms - ms, 0)
    minutes = diff // 60_000
    if minutes < 60:
        return f"{minutes}m ago"
    hours = diff // 3_600_000
    if hours < 24:
        return f"{hours}h ago"
    return f"{diff // 86_400_000}d ago"


def _age_style(ms: int, now_ms: int) -> str:
    diff = now_ms - ms
    if diff < 3_600_000:
        return "green"
    if diff < 86_400_000:
        return "yellow"
    return "red"


def render_cleanup(results: list[AnalysisResult], archive: bool, console: Console) -> None:
    """Print one row per workspace, in the order given."""
    mode = "(archive enabled)" if archive else "(report mode)"
    console.print(Text(f"memory-cleanup {mode}", style="bold"))

    table = Table(header_style="bold cyan")
    for column in [
        "Workspace",
        "Memory Path",
        "Daily Logs",
        ">30 Days",
        "Total Size",
        "Date Range",
        "Status",
    ]:
        table.add_column(column)
    if archive:
        table.add_column("Archived")

    for result in results:
        if result.error:
            status = Text("Error", style="red")
        elif result.exists:
            status = Text("OK", style="green")
        else:
            status = Text("Missing", style="yellow")

        stale = result.older_than_30_days_count
        row = [
            Text(result.workspace.name, style="white"),
            Text(str(result.memory_path), style="bright_black"),
            Text(str(result.daily_log_count), style="blue"),
            Text(str(stale), style="yellow" if stale else "green"),
            Text(format_bytes(result.total_size_bytes), style="magenta"),
            Text(f"{format_date(result.oldest_date)} -> {format_date(result.newest_date)}"),
            status,
        ]
        if archive:
            archived = result.archived_count
            row.append(Text(str(archived), style="green" if archived else "bright_black"))
        table.add_row(*row)

    console.print(table)

    for result in results:
        if result.error:
            console.print(Text(f"{result.workspace.name}: {result.error}", style="red"))


def render_status(
    statuses: list[AgentStatus],
    console: Console,
    now_ms: int | None = None,
) -> None:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000

    console.print(Text("\nOpenClaw Agent Status\n", style="bold cyan"))

    table = Table(show_lines=True)
    table.add_column("Agent", style="bold", min_width=15)
    table.add_column("Last Modified", min_width=12)
    table.add_column("Git Status", min_width=20)
    table.add_column("Recent Memory Notes", overflow="fold")

    for status in statuses:
        if status.error:
            last_mod = Text("Error", style="bright_black")
        elif status.last_modified_ms is None:
            label = "No files" if status.root_exists else "N/A"
            last_mod = Text(label, style="bright_black")
        else:
            last_mod = Text(
                format_age(status.last_modified_ms, now_ms),
                style=_age_style(status.last_modified_ms, now_ms),
            )

        if status.git is None:
            git = Text("No repo", style="bright_black")
        elif status.git.clean:
            git = Text(f"✓ {status.git.branch} (clean)", style="green")
        else:
            git = Text(f"⚠ {status.git.branch} ({status.git.changes} changes)", style="yellow")

        if status.notes:
            notes = Text("\n".join(status.notes), style="dim")
        else:
            placeholder = _NOTES_PLACEHOLDER.get(status.notes_state, "No recent notes")
            notes = Text(placeholder, style="bright_black")

        table.add_row(status.workspace.label, last_mod, git, notes)

    console.print(table)
