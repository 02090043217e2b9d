"""Dependency graph over input, computed and output nodes."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._algorithms import connected_components
from ._nodes import Edge, Node, NodeId, NodeKind

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """A directed graph of "is read by" relationships.

    This is an immutable data structure with query methods. Edges may point
    at node ids that are not in ``nodes`` (dangling references); queries
    report them as they are and partitioning ignores them.

    - predecessors(b) = {a} means "a is read when computing b"
    - successors(a) = {b} means "b reads a"

    Attributes:
        nodes: Mapping from node id to node, in insertion order.
        edges: Mapping from edge id to edge, in insertion order.

    """

    nodes: dict[NodeId, Node] = field(default_factory=dict)
    edges: dict[str, Edge] = field(default_factory=dict)
    _predecessors: dict[NodeId, frozenset[NodeId]] = field(default_factory=dict, repr=False, compare=False)
    _successors: dict[NodeId, frozenset[NodeId]] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_parts(cls, nodes: Iterable[Node], edges: Iterable[Edge]) -> DependencyGraph:
        """Build a graph from nodes and edges.

        Nodes are keyed by id and edges by edge id; the first occurrence of a
        repeated id wins.

        Example:
            >>> x = InputNode("x")
            >>> out = OutputNode("result", input_deps=("x",))
            >>> graph = DependencyGraph.from_parts([x, out], [Edge(x.id, out.id)])
            >>> list(graph.edges)
            ['input:x->output:result']

        """
        node_map: dict[NodeId, Node] = {}
        for node in nodes:
            node_map.setdefault(node.id, node)

        edge_map: dict[str, Edge] = {}
        predecessors: defaultdict[NodeId, set[NodeId]] = defaultdict(set)
        successors: defaultdict[NodeId, set[NodeId]] = defaultdict(set)
        for edge in edges:
            if edge.id in edge_map:
                continue
            edge_map[edge.id] = edge
            predecessors[edge.target].add(edge.source)
            successors[edge.source].add(edge.target)

        return cls(
            nodes=node_map,
            edges=edge_map,
            _predecessors={k: frozenset(v) for k, v in predecessors.items()},
            _successors={k: frozenset(v) for k, v in successors.items()},
        )

    def get_node(self, node_id: NodeId) -> Node:
        """Get a node by its id.

        Raises:
            KeyError: If no node exists with the given id.

        """
        return self.nodes[node_id]

    def nodes_of_kind(self, kind: NodeKind) -> list[Node]:
        """Get all nodes of a specific kind, in insertion order."""
        return [node for node_id, node in self.nodes.items() if node_id.kind == kind]

    def predecessors(self, node_id: NodeId) -> frozenset[NodeId]:
        """Get the ids this node reads directly."""
        return self._predecessors.get(node_id, frozenset())

    def successors(self, node_id: NodeId) -> frozenset[NodeId]:
        """Get the ids that read this node directly."""
        return self._successors.get(node_id, frozenset())

    def ancestors(self, node_id: NodeId) -> frozenset[NodeId]:
        """Get everything this node transitively reads."""
        visited: set[NodeId] = set()
        stack = list(self.predecessors(node_id))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.predecessors(current))
        return frozenset(visited)

    def descendants(self, node_id: NodeId) -> frozenset[NodeId]:
        """Get everything that transitively reads this node."""
        visited: set[NodeId] = set()
        stack = list(self.successors(node_id))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.successors(current))
        return frozenset(visited)

    def dangling_edges(self) -> list[Edge]:
        """Get edges with at least one endpoint that is not a known node."""
        return [
            edge for edge in self.edges.values() if edge.source not in self.nodes or edge.target not in self.nodes
        ]

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        """Check if a node id is in the graph."""
        return node_id in self.nodes


def find_components(graph: DependencyGraph) -> list[frozenset[NodeId]]:
    """Partition the graph's nodes into connected components.

    Edge direction is ignored. Edges to ids that are not nodes of the graph
    are dropped. Components come in the order of their first node's insertion
    into the graph; only membership is meaningful.

    Args:
        graph: The dependency graph.

    Returns:
        List of components, each a set of node ids.

    """
    dangling = graph.dangling_edges()
    if dangling:
        logger.debug(f"Ignoring {len(dangling)} edge(s) to unknown nodes: {', '.join(e.id for e in dangling)}")

    components = connected_components(
        graph.nodes,
        ((edge.source, edge.target) for edge in graph.edges.values()),
    )
    logger.debug(f"Found {len(components)} component(s) among {len(graph)} node(s)")
    return components
