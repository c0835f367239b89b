"""vsysc CLI Main Entry Point

Usage:
    vsysc run lib.vsc main.vsc         # run files in order, print last results
    vsysc run main.vsc -D name=world   # seed a global variable
    vsysc run main.vsc --plugin pkg.kw # load custom keywords from a module
    vsysc build main.vsc [--json]      # show the classified document
    vsysc wrap notes.txt --name notes  # wrap plain text as a document
    vsysc --version                    # show version
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional

import msgspec
import typer

from vsysc._version import __version__
from vsysc.builder import build_document, text_to_document
from vsysc.config import Settings, find_config_file
from vsysc.context import Context
from vsysc.engine import Interpreter
from vsysc.exceptions import VsyscError
from vsysc.models import Document
from vsysc.registry import load_plugin

from .utils import console, document_table, exit_with_error, print_results, setup_logging

log = logging.getLogger(__name__)

typer_app = typer.Typer(help="vsystem container language interpreter.", no_args_is_help=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vsysc {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """vsystem container language interpreter."""


def parse_defines(defines: Optional[List[str]]) -> dict[str, str]:
    """Parse NAME=VALUE pairs."""
    out: dict[str, str] = {}
    for item in defines or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"expected NAME=VALUE, got '{item}'")
        out[name.strip()] = value
    return out


def load_context(
    config: Optional[Path],
    plugins: Optional[List[str]] = None,
    defines: Optional[dict[str, str]] = None,
) -> Context:
    """Create a Context from vsysc.yaml, CLI plugins and defines."""
    config_path = config or find_config_file()
    settings = Settings.load(config_path) if config_path else Settings()
    if config_path:
        log.info("Using config %s", config_path)

    context = Context.from_settings(settings)
    for module_path in list(settings.plugins) + list(plugins or []):
        load_plugin(context.keywords, module_path)
    context.variables.update(defines or {})
    return context


def read_source(path: Path) -> str:
    if not path.exists():
        exit_with_error(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


async def run_files(context: Context, sources: List[str]) -> list[Any]:
    """Execute sources in order against one context, return the last results."""
    interpreter = Interpreter(context)
    results: list[Any] = []
    for source in sources:
        results = await interpreter.execute(source)
    return results


def show_document(document: Document, as_json: bool) -> None:
    if as_json:
        typer.echo(document.to_json().decode())
    else:
        console.print(document_table(document))


@typer_app.command()
def run(
    files: List[Path] = typer.Argument(..., help="Source files, executed in order."),
    plugins: Optional[List[str]] = typer.Option(
        None, "--plugin", "-p", help="Module that registers custom keywords."
    ),
    defines: Optional[List[str]] = typer.Option(
        None, "--define", "-D", help="Global variable as NAME=VALUE."
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to vsysc.yaml."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging."),
) -> None:
    """Execute vsysc files and print the results of the last one."""
    setup_logging(verbose)
    sources = [read_source(path) for path in files]

    try:
        context = load_context(config, plugins, parse_defines(defines))
        results = asyncio.run(run_files(context, sources))
    except VsyscError as exc:
        exit_with_error(str(exc))

    if as_json:
        typer.echo(msgspec.json.encode(results).decode())
    else:
        print_results(results)


@typer_app.command()
def build(
    file: Path = typer.Argument(..., help="Source file."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to vsysc.yaml."),
    as_json: bool = typer.Option(False, "--json", help="Print the document as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging."),
) -> None:
    """Classify a file and show its document without executing it."""
    setup_logging(verbose)
    source = read_source(file)

    try:
        context = load_context(config)
    except VsyscError as exc:
        exit_with_error(str(exc))

    show_document(build_document(source, context=context), as_json)


@typer_app.command()
def wrap(
    file: Path = typer.Argument(..., help="Plain text file."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Document name (defaults to file stem)."),
    as_json: bool = typer.Option(False, "--json", help="Print the document as JSON."),
) -> None:
    """Wrap plain text as a document with one WL per line."""
    source = read_source(file)
    document = text_to_document(source, name or file.stem, context=Context())
    show_document(document, as_json)


def app() -> None:
    """Entry point for the installed `vsysc` script."""
    typer_app()


if __name__ == "__main__":
    app()
