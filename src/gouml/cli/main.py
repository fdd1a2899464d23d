"""gouml CLI: Go source in, Mermaid class diagram out."""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import Settings, load_settings
from ..errors import GoUmlError
from ..samples import DEFAULT_GO_SOURCE
from ..service import DiagramService

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(add_completion=False, no_args_is_help=True)


def _resolve_settings(
    config_path: Optional[Path],
    output_format: Optional[str] = None,
    verbose: bool = False,
) -> Settings:
    settings = load_settings(config_path)
    if output_format:
        try:
            settings = Settings(**{**settings.model_dump(), "output_format": output_format})
        except ValidationError as exc:
            _fail(f"Invalid --format {output_format!r}: {exc.errors()[0]['msg']}")
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _read_source(source: Optional[Path]) -> str:
    if source is None or str(source) == "-":
        return sys.stdin.read()
    if not source.exists():
        err_console.print(f"[red]Source file not found:[/red] {source}")
        raise typer.Exit(1)
    try:
        return source.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        err_console.print(f"[red]Source file is not valid UTF-8:[/red] {source}")
        raise typer.Exit(1)


def _fail(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


@app.command()
def generate(
    source: Optional[Path] = typer.Argument(None, help="Go source file (stdin when omitted or '-')"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Render the diagram to this file"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="svg or png"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Print the Mermaid class diagram for a Go source file."""
    settings = _resolve_settings(config, output_format, verbose)
    service = DiagramService(settings)
    code = _read_source(source)

    result = asyncio.run(service.generate(code, render=output is not None))
    if result.diagram is not None:
        console.print(result.diagram, markup=False, highlight=False, soft_wrap=True)
    if not result.ok:
        _fail(result.error)

    if output is not None and result.artifact is not None:
        output.write_bytes(result.artifact)
        err_console.print(f"[green]Wrote {result.media_type} to[/green] {output}")


@app.command()
def inspect(
    source: Optional[Path] = typer.Argument(None, help="Go source file (stdin when omitted or '-')"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    """Show the types, members and relationships extracted from a Go file."""
    settings = _resolve_settings(config)
    service = DiagramService(settings)
    code = _read_source(source)

    try:
        parsed = service.parse(code)
    except GoUmlError as exc:
        _fail(exc.user_message)

    table = Table(title="Types")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Fields")
    table.add_column("Methods")
    table.add_column("Embeds")

    for entity in parsed.entities:
        table.add_row(
            entity.name,
            entity.kind,
            ", ".join(f.name for f in entity.fields),
            ", ".join(m.name for m in entity.methods),
            ", ".join(entity.embeds),
        )

    console.print(table)

    if parsed.relationships:
        console.print("[bold]Relationships[/bold]")
    for rel in parsed.relationships:
        console.print(f"  {rel.source} -> {rel.target} ({rel.edge_type})", highlight=False)


@app.command()
def example():
    """Print a sample Go program to try the generator with."""
    console.print(DEFAULT_GO_SOURCE, markup=False, highlight=False, soft_wrap=True)
