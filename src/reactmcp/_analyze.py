"""Analyze an application IR into independent tool groups."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ._diagnostics import check_references, diagnose
from ._graph import DependencyGraph, build_graph, find_components
from ._ir import AppIR
from ._resolve import resolve_output_dependencies
from ._tool_group import ToolGroup, materialize

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised when analyze() is called with something that is not a valid IR."""


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Outcome of analyze().

    Attributes:
        graph: The dependency graph (for introspection and debugging).
        tool_groups: One ToolGroup per connected component.
        warnings: Non-fatal findings, without repeats.

    """

    graph: DependencyGraph
    tool_groups: list[ToolGroup] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def get_tool_group(self, name: str) -> ToolGroup:
        """Get a tool group by its generated name.

        Raises:
            KeyError: If no tool group has that name.

        """
        for group in self.tool_groups:
            if group.name == name:
                return group
        raise KeyError(name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible data."""
        return {
            "graph": {
                "nodes": [str(node_id) for node_id in self.graph.nodes],
                "edges": list(self.graph.edges),
            },
            "tool_groups": [group.to_dict() for group in self.tool_groups],
            "warnings": list(self.warnings),
        }


def _coerce_ir(ir: object) -> AppIR:
    if isinstance(ir, AppIR):
        return ir
    if isinstance(ir, Mapping):
        try:
            return AppIR.model_validate(ir)
        except ValidationError as e:
            msg = f"Invalid application IR: {e}"
            raise AnalysisError(msg) from e
    msg = f"Expected an AppIR or a mapping, got {type(ir).__name__}"
    raise AnalysisError(msg)


def analyze(ir: AppIR | Mapping[str, Any], *, strict_references: bool = False) -> AnalysisResult:
    """Analyze an application and split it into tool groups.

    Steps:
    1. Resolve every output's transitive dependencies
    2. Build the dependency graph
    3. Find connected components
    4. Materialize each component into a ToolGroup
    5. Collect warnings from resolution, reference checks and pattern diagnostics

    Only an invalid IR raises. Dangling references, cycles and unsupported
    patterns end up in ``warnings``.

    Args:
        ir: An AppIR, or a mapping that validates into one.
        strict_references: Leave unresolved computed names out of each
            output's expanded dependencies (they are reported either way).

    Returns:
        An AnalysisResult.

    Raises:
        AnalysisError: If ``ir`` is not a structurally valid IR.

    """
    app_ir = _coerce_ir(ir)
    logger.debug(
        f"Analyzing IR: {len(app_ir.inputs)} input(s), {len(app_ir.outputs)} output(s), "
        f"{len(app_ir.computed)} computed value(s), {len(app_ir.observers)} observer(s)",
    )

    dependencies, resolve_warnings = resolve_output_dependencies(app_ir, strict=strict_references)
    graph = build_graph(app_ir, dependencies)
    components = find_components(graph)
    tool_groups = [materialize(component, app_ir) for component in components]
    logger.debug(f"Tool groups: {', '.join(group.name for group in tool_groups)}")

    warnings = [*resolve_warnings, *check_references(app_ir), *diagnose(app_ir)]

    return AnalysisResult(
        graph=graph,
        tool_groups=tool_groups,
        warnings=list(dict.fromkeys(warnings)),
    )
