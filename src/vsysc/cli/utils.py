"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from vsysc.models import ArrayValue, CommandValue, Document, ErrorValue, StringValue

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the vsysc CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level - exports, plugin loading
    - Debug (VSYSC_DEBUG=1): DEBUG level - every classified line
    """
    debug = bool(os.environ.get("VSYSC_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("vsysc")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Print an error and leave with `exit_code`."""
    err_console.print(f"[red]Error:[/red] {message}", markup=True, highlight=False)
    raise typer.Exit(code=exit_code)


_RECORD_STYLES = {
    StringValue: "green",
    ArrayValue: "cyan",
    CommandValue: "magenta",
    ErrorValue: "red",
}


def document_table(document: Document) -> Table:
    """Render a Document's records as a table."""
    table = Table(title=document.name or None)
    table.add_column("Identifier", style="bold")
    table.add_column("Type")
    table.add_column("Keyword")
    table.add_column("Line", justify="right")
    table.add_column("Value")

    for identifier, record in document.content.items():
        style = _RECORD_STYLES.get(type(record), "white")
        kind = type(record).__struct_config__.tag
        value = ", ".join(record.value) if isinstance(record, ArrayValue) else record.value
        table.add_row(
            Text(identifier),
            f"[{style}]{kind}[/{style}]",
            record.keyword,
            str(record.line),
            Text(value),
        )
    return table


def print_results(results: list[Any]) -> None:
    """Print one result per line; arrays are shown as bracketed lists."""
    for item in results:
        if isinstance(item, list):
            console.print("[" + ", ".join(str(v) for v in item) + "]", markup=False, highlight=False)
        else:
            console.print(str(item), markup=False, highlight=False)
