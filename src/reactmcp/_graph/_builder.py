"""Build a DependencyGraph from an application IR."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._dependency_graph import DependencyGraph
from ._nodes import ComputedNode, Edge, InputNode, Node, NodeId, NodeKind, OutputNode

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from reactmcp._ir import AppIR
    from reactmcp._resolve import OutputDependencies

logger = logging.getLogger(__name__)


def _edges_into(target: NodeId, input_deps: Iterable[str], computed_deps: Iterable[str]) -> list[Edge]:
    edges = [Edge(NodeId(NodeKind.INPUT, dep), target) for dep in input_deps]
    edges.extend(Edge(NodeId(NodeKind.COMPUTED, dep), target) for dep in computed_deps)
    return edges


def build_graph(
    ir: AppIR,
    dependencies: Mapping[str, OutputDependencies] | None = None,
) -> DependencyGraph:
    """Build the dependency graph of an application.

    The function:
    1. Creates an InputNode for every input
    2. Creates an OutputNode for every output, with input->output and
       computed->output edges
    3. Creates a ComputedNode for every computed value, with input->computed
       and computed->computed edges

    References to undefined names still produce edges; those edges point at
    ids that are not nodes of the graph.

    Args:
        ir: The application IR.
        dependencies: Resolved output dependencies. When given, an output's
            edges come from its expanded dependencies instead of its direct
            ones. Connectivity is the same; the graph just shows every
            argument of the output.

    Returns:
        A DependencyGraph.

    """
    nodes: list[Node] = []
    edges: list[Edge] = []

    # 1. Inputs
    nodes.extend(InputNode(inp.id) for inp in ir.inputs)

    # 2. Outputs
    for out in ir.outputs:
        node = OutputNode(out.id, input_deps=out.input_deps, computed_deps=out.computed_deps)
        nodes.append(node)

        resolved = dependencies.get(out.id) if dependencies is not None else None
        if resolved is not None:
            edges.extend(_edges_into(node.id, resolved.input_deps, resolved.computed_deps))
        else:
            edges.extend(_edges_into(node.id, out.input_deps, out.computed_deps))

    # 3. Computed values
    for comp in ir.computed:
        node = ComputedNode(comp.name, input_deps=comp.input_deps, computed_deps=comp.computed_deps)
        nodes.append(node)
        edges.extend(_edges_into(node.id, comp.input_deps, comp.computed_deps))

    graph = DependencyGraph.from_parts(nodes, edges)
    logger.debug(f"Built graph with {len(graph.nodes)} node(s) and {len(graph.edges)} edge(s)")
    return graph
