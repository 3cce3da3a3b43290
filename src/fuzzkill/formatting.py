"""Formatting utilities for consistent output across CLI and picker."""

from collections.abc import Iterable

from rich.table import Table
from rich.text import Text

from fuzzkill.records import ProcessRecord

PID_WIDTH = 6


def format_pid(record: ProcessRecord) -> str:
    """Return the pid as text, or "?" when unknown."""
    return str(record.id) if record.has_pid else "?"


def group_label(name: str, count: int) -> str:
    """Plain label for a select-all entry, e.g. "All chrome (2)"."""
    return f"All {name} ({count})"


def leaf_label(record: ProcessRecord) -> str:
    """Plain one-line label for a single process.

    Format: pid (right-aligned), name, then title, owner and SYSTEM marker
    when present.
    """
    parts = [f"{format_pid(record):>{PID_WIDTH}}", record.name or ""]
    if record.title and record.title.strip():
        parts.append(record.title)
    user = record.user_display
    if user and user.strip():
        parts.append(user)
    if record.is_system_owned:
        parts.append("SYSTEM")
    return " ".join(parts)


def group_text(name: str, count: int) -> Text:
    """Styled select-all entry."""
    return Text.assemble(
        ("All", "bold"),
        " ",
        (name, "white"),
        " ",
        (f"({count})", "grey50"),
    )


def leaf_text(record: ProcessRecord) -> Text:
    """Styled single-process entry. Process strings are never parsed as markup."""
    text = Text.assemble(
        (f"{format_pid(record):>{PID_WIDTH}}", "grey50"),
        " ",
        (record.name or "", "white"),
    )
    if record.title and record.title.strip():
        text.append(" ")
        text.append(record.title, style="dim")
    user = record.user_display
    if user and user.strip():
        text.append(" ")
        text.append(user, style="cyan")
    if record.is_system_owned:
        text.append(" ")
        text.append("SYSTEM", style="bold red")
    return text


def records_table(records: Iterable[ProcessRecord]) -> Table:
    """Build a PID/Name/Title/User grid for the details view."""
    table = Table(box=None, show_edge=False, pad_edge=False)
    table.add_column("PID", style="grey50", header_style="bold grey50", justify="right")
    table.add_column("Name", header_style="bold")
    table.add_column("Title", style="dim", header_style="bold dim")
    table.add_column("User", style="cyan", header_style="bold cyan")

    for record in records:
        name = Text(record.name or "")
        if record.is_system_owned:
            name.append(" ")
            name.append("SYSTEM", style="bold red")
        table.add_row(
            Text(format_pid(record)),
            name,
            Text(record.title or ""),
            Text(record.user_display or ""),
        )
    return table
