"""Shared helpers for CLI commands."""

import logging
from pathlib import Path
from typing import Any, NoReturn, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ...models.config import BootstrapSettings, load_settings
from ...models.report import BootstrapReport

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Route log records through rich on the root logger."""
    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def fail(ctx: click.Context, message: Any) -> NoReturn:
    """Print a fatal error and exit with status 1."""
    err_console.print(f"[bold red]\\[FAIL][/bold red]  {escape(str(message))}", highlight=False, soft_wrap=True)
    ctx.exit(1)


def settings_from_context(ctx: click.Context, **overrides: Any) -> BootstrapSettings:
    """Load settings using the group-level options, then set up logging.

    Raises:
        ConfigurationError: If the settings are invalid
    """
    obj = ctx.find_root().obj or {}
    env_file: Optional[Path] = obj.get("env_file")
    settings = load_settings(env_file, **overrides)
    configure_logging(obj.get("log_level") or settings.log_level)
    return settings


def render_report(report: BootstrapReport, title: str = "Bootstrap summary") -> None:
    """Print the summary table and the stacks that were deployed."""
    table = Table(title=title, show_header=False)
    table.add_column("Item", style="cyan", no_wrap=True)
    table.add_column("Result", style="white")
    for item, result in report.rows():
        table.add_row(item, result)
    console.print(table)

    if report.stacks:
        stacks = Table(title="Deployed stacks")
        stacks.add_column("Stack", style="cyan", no_wrap=True)
        stacks.add_column("Action", style="green")
        stacks.add_column("Compose file", style="white")
        for stack in report.stacks:
            stacks.add_row(stack.name, stack.action, stack.path)
        console.print(stacks)
