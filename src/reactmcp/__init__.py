"""Reactive graph analysis for converting UI apps into MCP tools."""

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "AppIR",
    "ClosureResult",
    "Complexity",
    "ComputedDef",
    "DependencyGraph",
    "IRLoadError",
    "InputDef",
    "NodeId",
    "NodeKind",
    "ObserverDef",
    "OutputDef",
    "OutputDependencies",
    "ToolGroup",
    "analyze",
    "build_graph",
    "check_references",
    "diagnose",
    "expand_computed_closure",
    "export_analysis_to_json",
    "find_components",
    "load_ir",
    "materialize",
    "resolve_output_dependencies",
]

from ._analyze import AnalysisError, AnalysisResult, analyze
from ._diagnostics import check_references, diagnose
from ._graph import DependencyGraph, NodeId, NodeKind, build_graph, find_components
from ._io import IRLoadError, export_analysis_to_json, load_ir
from ._ir import AppIR, Complexity, ComputedDef, InputDef, ObserverDef, OutputDef
from ._resolve import ClosureResult, OutputDependencies, expand_computed_closure, resolve_output_dependencies
from ._tool_group import ToolGroup, materialize
