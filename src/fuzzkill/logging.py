"""Centralized console logging with Rich formatting.

This module provides:
1. Icon vocabulary (Icon class namespace)
2. Level-based styling
3. Core log functions (log, info, warn, error)
4. Domain-specific helpers (matches_found, process_killed, etc.)
5. Structlog configuration (configure, get_structlog)

Console output uses Rich markup for colors. JSON file output via structlog
remains separate (machine-parseable, no colors).
"""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING

import structlog
from rich.console import Console, RenderableType
from rich.markup import escape

if TYPE_CHECKING:
    from fuzzkill.config import Config

# Rich console for colorful human-readable output
_console = Console(highlight=False)


# ─────────────────────────────────────────────────────────────────────────────
# Icons
# ─────────────────────────────────────────────────────────────────────────────


class Icon:
    """Icon vocabulary for console output.

    Use via autocomplete: Icon.<TAB> to see all available icons.
    """

    OK = "[bold green]✓[/]"
    FAIL = "[bold red]✗[/]"
    SEARCH = "🔎"
    KILL = "[bold red]☠[/]"
    GONE = "[dim]○[/]"


# ─────────────────────────────────────────────────────────────────────────────
# Level Styles
# ─────────────────────────────────────────────────────────────────────────────

_LEVEL_STYLES = {
    "info": "[bright_blue]\\[info][/]",
    "warn": "[yellow]\\[warn][/]",
    "error": "[bold red]\\[err][/] ",
}


# ─────────────────────────────────────────────────────────────────────────────
# Core Functions
# ─────────────────────────────────────────────────────────────────────────────


def log(level: str, msg: str, icon: str = "") -> None:
    """Print a log message with timestamp and level.

    Args:
        level: Log level (info, warn, error)
        msg: Message to print (can include Rich markup)
        icon: Optional icon to show after level (e.g., Icon.OK)
    """
    ts = datetime.now().strftime("%H:%M:%S")
    lvl = _LEVEL_STYLES.get(level, f"[{level}]")
    icon_part = f" {icon}" if icon else ""
    _console.print(f"[dim]{ts}[/] {lvl}{icon_part} {msg}")


def info(msg: str, icon: str = "") -> None:
    """Log an info message."""
    log("info", msg, icon)


def warn(msg: str, icon: str = "") -> None:
    """Log a warning message."""
    log("warn", msg, icon)


def error(msg: str, icon: str = "") -> None:
    """Log an error message."""
    log("error", msg, icon)


def render(renderable: RenderableType) -> None:
    """Print a Rich renderable (table, text) as-is."""
    _console.print(renderable)


@contextmanager
def status(msg: str) -> Iterator[None]:
    """Show a spinner while the body runs."""
    with _console.status(escape(msg), spinner="dots", spinner_style="yellow"):
        yield


# ─────────────────────────────────────────────────────────────────────────────
# Domain Helpers
# ─────────────────────────────────────────────────────────────────────────────


def _proc(name: str, pid: int) -> str:
    pid_part = str(pid) if pid > 0 else "?"
    return f"[cyan]{escape(name)}[/] [dim]({pid_part})[/]"


def matches_found(count: int, query: str) -> None:
    """Log number of processes matching a query."""
    suffix = "es" if count != 1 else ""
    info(f"[cyan]{count}[/] match{suffix} for [bold]{escape(query)}[/]", Icon.SEARCH)


def no_matches(query: str) -> None:
    """Log that nothing matched."""
    info(f"No processes found for [bold]{escape(query)}[/]")


def invalid_pattern(pattern: str, reason: str) -> None:
    """Log an uncompilable regex query."""
    warn(f"Invalid pattern [bold]{escape(pattern)}[/][dim]: {escape(reason)}[/]")


def snapshot_failed(error_msg: str) -> None:
    """Log that the process list could not be read."""
    warn(f"Could not enumerate processes: {escape(error_msg)}")


def selection_cancelled() -> None:
    """Log empty selection."""
    info("Nothing selected")


def process_killed(name: str, pid: int) -> None:
    """Log process terminated."""
    info(f"Killed {_proc(name, pid)}", Icon.KILL)


def process_already_gone(name: str, pid: int) -> None:
    """Log process exited before we got to it."""
    warn(f"{_proc(name, pid)} already exited", Icon.GONE)


def kill_failed(name: str, pid: int, reason: str) -> None:
    """Log failure to terminate a process."""
    error(f"Failed to kill {_proc(name, pid)}: {escape(reason)}", Icon.FAIL)


def kill_summary(killed: int, failed: int) -> None:
    """Log totals after a kill run."""
    if failed:
        warn(f"Killed [cyan]{killed}[/], [red]{failed}[/] failed")
    else:
        info(f"Killed [cyan]{killed}[/]", Icon.OK)


def config_invalid(error_msg: str) -> None:
    """Log unusable config file."""
    error(f"Config error: {escape(error_msg)}", Icon.FAIL)


# ─────────────────────────────────────────────────────────────────────────────
# Structlog Configuration
# ─────────────────────────────────────────────────────────────────────────────


def _add_source(source: str) -> structlog.types.Processor:
    """Create a processor that adds a source field to log events."""

    def processor(
        logger: structlog.types.WrappedLogger,
        method_name: str,
        event_dict: structlog.types.EventDict,
    ) -> structlog.types.EventDict:
        event_dict["source"] = source
        return event_dict

    return processor


def configure(config: Config) -> None:
    """Configure structlog to write JSON lines to the rotating log file.

    Console output is handled by Rich (see log functions above);
    structlog only writes to the file for machine parsing.

    Args:
        config: Application config with paths
    """
    config.state_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        config.log_path,
        maxBytes=config.system.log_max_bytes,
        backupCount=config.system.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)

    stdlib_root = logging.getLogger()
    stdlib_root.setLevel(logging.INFO)
    stdlib_root.handlers.clear()

    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso", utc=False, key="ts"),
                structlog.processors.add_log_level,
                _add_source("cli"),
                structlog.processors.format_exc_info,
            ],
        )
    )
    stdlib_root.addHandler(file_handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False, key="ts"),
            structlog.processors.add_log_level,
            _add_source("cli"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_structlog() -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance for JSON file output."""
    return structlog.get_logger()
