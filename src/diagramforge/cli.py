"""CLI interface for diagramforge using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from diagramforge import __description__, __version__
from diagramforge.config import OutputFormat, load_config
from diagramforge.description import build_diagram, load_description
from diagramforge.errors import DiagramError

app = typer.Typer(
    name="diagramforge",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"diagramforge version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """diagramforge - Declarative builder for clustered Graphviz diagrams."""


@app.command()
def render(
    description: Annotated[
        Path,
        typer.Argument(help="Diagram description file (JSON or YAML)")
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output directory (default: from config)")
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format (default: from config)")
    ] = None,
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .diagramforge.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """Render a diagram description to Graphviz output."""
    try:
        df_config = load_config(config)
        _setup_logging("debug" if verbose else df_config.logging.level)

        if format is not None:
            df_config.output.format = format.value
        outdir = output or Path(df_config.output.dir)

        diagram = build_diagram(load_description(description), df_config)

        renderer = diagram.build()
        dangling = renderer.dangling_edges()
        if dangling:
            listed = ", ".join(f"{start} -> {end}" for start, end in dangling)
            if df_config.render.fail_on_dangling:
                console.print(f"[red]Error:[/red] Edges reference undeclared nodes: {listed}")
                raise typer.Exit(1)
            console.print(f"[yellow]Warning:[/yellow] Edges reference undeclared nodes: {listed}")

        written = diagram.render(outdir, renderer=renderer)
        console.print(f"[green]✓[/green] Rendered {description} to {written}")

    except (DiagramError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def validate(
    description: Annotated[
        Path,
        typer.Argument(help="Diagram description file (JSON or YAML)")
    ],
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .diagramforge.json)")
    ] = None,
) -> None:
    """Build a diagram description without writing any output."""
    try:
        df_config = load_config(config)
        _setup_logging(df_config.logging.level)

        renderer = build_diagram(load_description(description), df_config).build()

    except (DiagramError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    counts: dict[str, int] = {}
    for declaration in renderer.declarations:
        counts[declaration.kind.value] = counts.get(declaration.kind.value, 0) + 1

    table = Table(title=f"Diagram: {description.name}")
    table.add_column("Declaration", style="cyan")
    table.add_column("Count", justify="right")
    for kind in ("subgraph", "node", "edge"):
        table.add_row(kind, str(counts.get(kind, 0)))
    console.print(table)

    dangling = renderer.dangling_edges()
    if dangling:
        console.print(f"[yellow]Warning:[/yellow] {len(dangling)} edge(s) reference undeclared nodes")

    console.print("[green]✓[/green] Description is valid")


if __name__ == "__main__":
    app()
