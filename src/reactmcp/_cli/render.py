"""Rich rendering utilities for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from reactmcp._graph import NodeKind

if TYPE_CHECKING:
    from rich.console import Console

    from reactmcp._analyze import AnalysisResult
    from reactmcp._graph import DependencyGraph, NodeId
    from reactmcp._ir import AppIR
    from reactmcp._tool_group import ToolGroup


def render_ir_summary(ir: AppIR, console: Console) -> None:
    """Render entity counts and complexity of an IR.

    Args:
        ir: The application IR.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Inputs", justify="right")
    table.add_column("Outputs", justify="right")
    table.add_column("Computed", justify="right")
    table.add_column("Observers", justify="right")
    table.add_column("Complexity")
    table.add_row(
        str(len(ir.inputs)),
        str(len(ir.outputs)),
        str(len(ir.computed)),
        str(len(ir.observers)),
        ir.complexity.upper(),
    )
    title = f"[bold]{escape(ir.source)}[/bold]" if ir.source else "[bold]Application[/bold]"
    console.print(Panel(table, title=title, border_style="cyan"))


def render_tool_groups(groups: list[ToolGroup], console: Console) -> None:
    """Render tool groups as a Rich table.

    Args:
        groups: Tool groups to render.
        console: Rich Console to output to.

    """
    if not groups:
        console.print("[dim]No tool groups[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Tool", style="bold")
    table.add_column("Inputs")
    table.add_column("Outputs")
    table.add_column("Computed", style="dim")

    for group in groups:
        table.add_row(
            escape(group.name),
            escape(", ".join(f"{inp.id} ({inp.type})" for inp in group.input_args)),
            escape(", ".join(f"{out.id} ({out.type})" for out in group.output_targets)),
            escape(", ".join(group.computed_names)),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(groups)} tool group(s)[/dim]")


def render_warnings(warnings: list[str], console: Console) -> None:
    if not warnings:
        return
    console.print("[yellow]⚠ Warnings:[/yellow]")
    for warning in warnings:
        console.print(f"  [yellow]•[/yellow] {escape(warning)}")


def render_analysis(result: AnalysisResult, console: Console) -> None:
    """Render tool groups and warnings of an analysis."""
    render_tool_groups(result.tool_groups, console)
    console.print()
    render_warnings(result.warnings, console)


def render_graph(graph: DependencyGraph, console: Console) -> None:
    """Render all nodes and edges of a graph.

    Edges whose endpoints are not nodes of the graph are marked as dangling.

    Args:
        graph: The dependency graph.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node")
    table.add_column("Kind")
    table.add_column("Reads", justify="right")
    table.add_column("Read by", justify="right")

    for node_id in graph.nodes:
        kind_style = _get_kind_style(node_id.kind)
        table.add_row(
            escape(node_id.name),
            f"[{kind_style}]{node_id.kind.upper()}[/{kind_style}]",
            str(len(graph.predecessors(node_id))),
            str(len(graph.successors(node_id))),
        )
    console.print(table)

    dangling = {edge.id for edge in graph.dangling_edges()}
    console.print(f"\n[cyan]Edges ({len(graph.edges)}):[/cyan]")
    for edge_id in graph.edges:
        suffix = " [red](dangling)[/red]" if edge_id in dangling else ""
        console.print(f"  {escape(edge_id)}{suffix}")


def render_node_tree(graph: DependencyGraph, node_id: NodeId, console: Console) -> None:
    """Render what a node reads, recursively, as a Rich Tree.

    Each node is expanded once; repeated visits are shown but not expanded.

    Args:
        graph: The dependency graph.
        node_id: Root of the tree.
        console: Rich Console to output to.

    """
    rich_tree = Tree(f"[bold]{escape(str(node_id))}[/bold]")
    _add_tree_children(graph, rich_tree, node_id, {node_id})
    console.print(rich_tree)
    console.print(f"[dim]{len(graph.ancestors(node_id))} upstream node(s)[/dim]")

    readers = sorted(graph.descendants(node_id))
    if readers:
        console.print(f"[cyan]Read by ({len(readers)} transitively):[/cyan]")
        for reader in readers:
            console.print(f"  {escape(str(reader))}")


def _add_tree_children(graph: DependencyGraph, parent: Tree, node_id: NodeId, seen: set[NodeId]) -> None:
    for child in sorted(graph.predecessors(node_id)):
        label = escape(str(child))
        if child not in graph:
            parent.add(f"{label} [red](undefined)[/red]")
        elif child in seen:
            parent.add(f"{label} [dim](seen)[/dim]")
        else:
            seen.add(child)
            _add_tree_children(graph, parent.add(label), child, seen)


def _get_kind_style(kind: NodeKind) -> str:
    """Get Rich style string for a node kind.

    Args:
        kind: The NodeKind.

    Returns:
        Rich style string.

    """
    match kind:
        case NodeKind.INPUT:
            return "blue"
        case NodeKind.COMPUTED:
            return "green"
        case NodeKind.OUTPUT:
            return "yellow"
