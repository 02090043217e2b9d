"""Graph module providing the dependency graph and its algorithms.

This module contains:
- NodeKind, NodeId, InputNode, ComputedNode, OutputNode, Edge: graph elements
- DependencyGraph: an immutable directed graph of "is read by" edges
- build_graph: Build a DependencyGraph from an application IR
- find_components: Connected components of a DependencyGraph
- topological_sort, breadth_first_closure, UnionFind, connected_components:
  the generic algorithms underneath
"""

from ._algorithms import (
    CycleError,
    UnionFind,
    breadth_first_closure,
    connected_components,
    topological_sort,
)
from ._builder import build_graph
from ._dependency_graph import DependencyGraph, find_components
from ._nodes import ComputedNode, Edge, InputNode, Node, NodeId, NodeKind, OutputNode

__all__ = [
    "ComputedNode",
    "CycleError",
    "DependencyGraph",
    "Edge",
    "InputNode",
    "Node",
    "NodeId",
    "NodeKind",
    "OutputNode",
    "UnionFind",
    "breadth_first_closure",
    "build_graph",
    "connected_components",
    "find_components",
    "topological_sort",
]
