"""
LinguaSync CLI - Main entry point
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linguasync.core.config.settings import settings
from linguasync.core.config.validation import ConfigValidator, PriorityMode
from linguasync.core.exceptions.custom_exceptions import LinguaSyncError
from linguasync.core.logging.logger import get_logger
from linguasync.detection.manager import RegistryManager
from linguasync.detection.registry import Registry
from linguasync.processing.preprocessing.cleaners import (
    HTMLCleaner,
    WhitespaceNormalizer,
)

app = typer.Typer(
    name="linguasync",
    help="Character n-gram language identification",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
logger = get_logger(__name__)


def _load_registry(profiles: Optional[Path], short: bool) -> Registry:
    if profiles is not None:
        registry = Registry("cli")
        registry.load_from_directory(profiles)
        return registry

    manager = RegistryManager()
    if short:
        return manager.get_default_short_text()
    return manager.get_default()


def _read_input(text: Optional[str], file: Optional[Path], html: bool) -> str:
    if file is not None:
        try:
            content = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            console.print(
                f"Cannot read input file {file}: {escape(str(e))}", style="red"
            )
            raise typer.Exit(1)
    elif text is not None:
        content = text
    else:
        console.print("Provide TEXT or --file", style="red")
        raise typer.Exit(1)

    if html:
        content = WhitespaceNormalizer()(HTMLCleaner()(content))
    return content


@app.command()
def detect(
    text: Optional[str] = typer.Argument(None, help="Text to identify"),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="Read the text from a file"
    ),
    html: bool = typer.Option(False, "--html", help="Strip HTML markup first"),
    profiles: Optional[Path] = typer.Option(
        None, "--profiles", "-p", help="Profile directory instead of the bundled set"
    ),
    short: bool = typer.Option(
        False, "--short", help="Use the short-text profile set"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed for reproducible results"
    ),
    alpha: Optional[float] = typer.Option(
        None, "--alpha", help="Smoothing parameter (0-1)"
    ),
    priority: Optional[str] = typer.Option(
        None,
        "--priority",
        help="Priority weights, e.g. 'en=0.5,fr=0.2'",
    ),
    replace: bool = typer.Option(
        False, "--replace", help="Restrict results to the priority languages"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML/JSON file with detector options"
    ),
    show_all: bool = typer.Option(
        False, "--all", help="Show every language, not only likely ones"
    ),
) -> None:
    """Detect the language of TEXT (or of --file)"""
    content = _read_input(text, file, html)

    try:
        options = ConfigValidator.load_config(str(config_file)) if config_file else {}
        if seed is not None:
            options["seed"] = seed
        if alpha is not None:
            options["alpha"] = alpha
        if priority:
            options["priority_map"] = _parse_priority(priority)
            options["priority_mode"] = (
                PriorityMode.REPLACE if replace else PriorityMode.ADDITIVE
            )

        registry = _load_registry(profiles, short)
        detector = registry.create(**options)
        detector.append(content)
        language = detector.detect()
        ranked = detector.distribution() if show_all else detector.get_probabilities()
    except LinguaSyncError as e:
        console.print(f"Error: {escape(e.message)}", style="red")
        logger.debug("Detection failed", error_code=e.error_code, details=e.details)
        raise typer.Exit(1)

    console.print(f"Detected language: [bold green]{language}[/bold green]")
    if detector.is_truncated:
        console.print(
            f"Input truncated to {detector.config.max_text_length} characters",
            style="yellow",
        )

    if ranked:
        table = Table(title="Language Probabilities")
        table.add_column("Language", style="cyan")
        table.add_column("Probability", style="green", justify="right")
        for item in ranked:
            table.add_row(item.lang, f"{item.prob:.5f}")
        console.print(table)


def _parse_priority(value: str) -> dict:
    weights = {}
    for pair in value.split(","):
        lang, sep, weight = pair.partition("=")
        if not sep or not lang.strip():
            console.print(f"Invalid priority entry: '{pair}'", style="red")
            raise typer.Exit(1)
        try:
            weights[lang.strip()] = float(weight)
        except ValueError:
            console.print(f"Invalid priority weight: '{weight}'", style="red")
            raise typer.Exit(1)
    return weights


@app.command()
def languages(
    profiles: Optional[Path] = typer.Option(
        None, "--profiles", "-p", help="Profile directory instead of the bundled set"
    ),
    short: bool = typer.Option(
        False, "--short", help="Use the short-text profile set"
    ),
) -> None:
    """List the languages a registry can detect"""
    try:
        registry = _load_registry(profiles, short)
    except LinguaSyncError as e:
        console.print(f"Error: {escape(e.message)}", style="red")
        raise typer.Exit(1)

    table = Table(title=f"Registry '{registry.name}'")
    table.add_column("Column", style="cyan", justify="right")
    table.add_column("Language", style="green")
    for index, lang in enumerate(registry.languages):
        table.add_row(str(index), lang)
    console.print(table)
    console.print(f"{len(registry)} languages loaded")


def version_callback(value: bool) -> None:
    """Handle version callback"""
    if value:
        version()
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show LinguaSync version and exit",
    ),
) -> None:
    """
    LinguaSync CLI - Character n-gram language identification

    Run 'linguasync --help' for available commands.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.info("Verbose logging enabled")


@app.command()
def version() -> None:
    """Show LinguaSync version information"""
    table = Table(title="LinguaSync Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Environment", style="yellow")

    table.add_row("LinguaSync", settings.APP_VERSION, settings.ENVIRONMENT)
    table.add_row("Python", "3.9+", "Required")

    console.print(table)


if __name__ == "__main__":
    app()
