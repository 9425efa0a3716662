"""scoper-symbols CLI - query the PHP built-in symbol registry."""
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from .config import __version__, get_config
from .registry.corrections import (
    MISSING_CLASSES,
    MISSING_CONSTANTS,
    MISSING_FUNCTIONS,
    stale_corrections,
)
from .registry.reflector import Reflector
from .registry.stubs_map import StubsMapError, load_stubs_map
from .registry.symbol_table import SymbolRegistry
from .utils.safe_console import SafeConsole

app = typer.Typer(
    name="scoper-symbols",
    help="Classify PHP symbols as built-in or user-defined",
    add_completion=False
)
console = SafeConsole()


class SymbolKind(str, Enum):
    CLASS = "class"
    FUNCTION = "function"
    CONSTANT = "constant"


def _load_reflector(stubs: Optional[Path]) -> Reflector:
    """Build a Reflector, exiting with code 2 on bad reference data."""
    try:
        if stubs is None:
            return Reflector()
        return Reflector(SymbolRegistry.build(load_stubs_map(stubs)))
    except StubsMapError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(2)


@app.command()
def check(
    names: List[str] = typer.Argument(..., help="Fully-qualified symbol names to classify"),
    kind: SymbolKind = typer.Option(SymbolKind.CLASS, "--kind", "-k", help="Symbol kind (class, function, constant)"),
    stubs: Optional[Path] = typer.Option(None, "--stubs", help="Reference map to use instead of the configured one"),
):
    """Report whether each name is a PHP built-in."""
    reflector = _load_reflector(stubs)
    lookup = {
        SymbolKind.CLASS: reflector.is_class_internal,
        SymbolKind.FUNCTION: reflector.is_function_internal,
        SymbolKind.CONSTANT: reflector.is_constant_internal,
    }[kind]

    table = Table(title=f"{kind.value.capitalize()} Symbols", show_header=True, header_style="bold cyan")
    table.add_column("Symbol", style="cyan")
    table.add_column("Verdict")

    for name in names:
        if lookup(name):
            table.add_row(escape(name), "[green]internal[/green]")
        else:
            table.add_row(escape(name), "[yellow]user[/yellow]")

    console.print(table)


@app.command()
def stats(
    stubs: Optional[Path] = typer.Option(None, "--stubs", help="Reference map to use instead of the configured one"),
):
    """Display symbol table sizes and the reference map in use."""
    registry_stats = _load_reflector(stubs).registry.stats()
    edition = get_config().edition_label or registry_stats['edition'] or "unknown"

    table = Table(title="Symbol Registry", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Classes", str(registry_stats['classes']))
    table.add_row("Functions", str(registry_stats['functions']))
    table.add_row("Constants", str(registry_stats['constants']))
    table.add_row("Edition", escape(edition))
    table.add_row("Source", escape(registry_stats['source'] or "<memory>"))

    console.print(table)


@app.command()
def corrections(
    stubs: Optional[Path] = typer.Option(None, "--stubs", help="Reference map to use instead of the configured one"),
    stale: bool = typer.Option(False, "--stale", help="Only list corrections the reference map already covers"),
):
    """List hand-maintained corrections, grouped by upstream tracker.

    With --stale, exits with code 1 when any correction can be removed.
    """
    stubs_map = _load_reflector(stubs).registry.stubs_map

    sections = [
        ("Classes", MISSING_CLASSES, stubs_map.classes, True),
        ("Functions", MISSING_FUNCTIONS, stubs_map.functions, False),
        ("Constants", MISSING_CONSTANTS, stubs_map.constants, True),
    ]

    found_stale = False
    for title, missing, reference, case_sensitive in sections:
        if stale:
            missing = stale_corrections(missing, reference, case_sensitive=case_sensitive)
            found_stale = found_stale or bool(missing)
        if not missing:
            continue

        table = Table(title=f"{title} Corrections", show_header=True, header_style="bold cyan")
        table.add_column("Tracker", style="magenta", no_wrap=False)
        table.add_column("Count", justify="right", style="green")
        table.add_column("Symbols", style="cyan", no_wrap=False)

        for tracker, names in missing.items():
            table.add_row(escape(tracker), str(len(names)), escape(", ".join(names)))

        console.print(table)

    if stale:
        if found_stale:
            console.print("[bold yellow]⚠ Stale corrections found: the reference map now ships them.[/bold yellow]")
            raise typer.Exit(1)
        console.print("[green]✓ No stale corrections[/green]")


def _version_callback(value: bool):
    if value:
        console.print(f"scoper-symbols {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
):
    """scoper-symbols - PHP built-in symbol registry."""
    pass


if __name__ == "__main__":
    app()
