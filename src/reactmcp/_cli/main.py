import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from reactmcp._analyze import AnalysisError, analyze
from reactmcp._graph import NodeId, build_graph
from reactmcp._io import IRLoadError, export_analysis_to_json, load_ir
from reactmcp._ir import AppIR, Complexity

from .config import ConfigError, ReactmcpConfig, get_config
from .render import render_analysis, render_graph, render_ir_summary, render_node_tree

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Reactmcp CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]✗ {escape(message)}[/red]")
    err_console.print()
    return typer.Exit(code=1)


def _load_config() -> ReactmcpConfig:
    try:
        return get_config()
    except ConfigError as e:
        raise _fail(str(e)) from e


def _load(path: Path | None, config: ReactmcpConfig) -> AppIR:
    """Load the IR from ``path``, or from the configured default."""
    if path is None:
        if config.ir is None:
            msg = "No IR file given and no [tool.reactmcp].ir configured"
            raise _fail(msg)
        path = config.ir
        logger.debug(f"Using IR path from config: {path}")

    err_console.print(f"[cyan]Loading IR from:[/cyan] {path}")
    try:
        return load_ir(path)
    except IRLoadError as e:
        raise _fail(str(e)) from e


@app.command(name="analyze")
def analyze_command(
    ir_path: Annotated[
        Path | None,
        typer.Argument(help="Path to the IR file (.json or .toml); defaults to [tool.reactmcp].ir"),
    ] = None,
    *,
    strict: Annotated[
        bool | None,
        typer.Option(
            "--strict/--tolerant",
            help="Leave unresolved computed values out of output dependencies",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the analysis to a JSON file"),
    ] = None,
) -> None:
    """Split an application into tool groups and report warnings."""
    err_console.print()
    config = _load_config()
    ir = _load(ir_path, config)
    err_console.print()
    render_ir_summary(ir, err_console)
    err_console.print()

    if strict is None:
        strict = bool(config.strict_references)

    err_console.print("[cyan]Analyzing reactive graph...[/cyan]")
    try:
        result = analyze(ir, strict_references=strict)
    except AnalysisError as e:
        raise _fail(str(e)) from e
    err_console.print()

    render_analysis(result, out_console)

    if output is not None:
        err_console.print(f"[cyan]Writing analysis to:[/cyan] {output}")
        try:
            export_analysis_to_json(result, output)
        except OSError as e:
            msg = f"Could not write {output}: {e}"
            raise _fail(msg) from e

    err_console.print()
    err_console.print("[green]✓ Analysis complete[/green]")
    if ir.complexity == Complexity.COMPLEX:
        err_console.print("[yellow]⚠ This app has complex patterns; review the tool groups manually.[/yellow]")
    err_console.print()


@app.command(name="graph")
def graph_command(
    ir_path: Annotated[
        Path | None,
        typer.Argument(help="Path to the IR file (.json or .toml); defaults to [tool.reactmcp].ir"),
    ] = None,
    *,
    node: Annotated[
        str | None,
        typer.Option("--node", help="Show what one node reads, e.g. 'output:scatter'"),
    ] = None,
) -> None:
    """Show the dependency graph, or the neighbourhood of one node."""
    err_console.print()
    ir = _load(ir_path, _load_config())
    err_console.print()

    graph = build_graph(ir)

    if node is None:
        render_graph(graph, out_console)
        return

    try:
        node_id = NodeId.parse(node)
    except ValueError as e:
        raise _fail(str(e)) from e
    if node_id not in graph:
        msg = f"Node '{node_id}' not found in graph"
        raise _fail(msg)

    render_node_tree(graph, node_id, out_console)


if __name__ == "__main__":
    app()
