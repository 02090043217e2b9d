"""Advisory checks on an application IR.

Nothing here stops an analysis: every finding is a message for the person
reviewing the conversion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._graph import CycleError, topological_sort
from ._resolve import unresolved_computed_message

if TYPE_CHECKING:
    from ._ir import AppIR

DYNAMIC_UI_OUTPUT_TYPES = frozenset({"ui", "html"})
FILE_INPUT_TYPE = "file"
DOWNLOAD_OUTPUT_TYPE = "download"


def diagnose(ir: AppIR) -> list[str]:
    """Look for patterns that cannot be converted automatically.

    One message per category, however many times the pattern occurs.

    Args:
        ir: The application IR.

    Returns:
        List of warning messages (empty when nothing was found).

    """
    warnings: list[str] = []

    if any(out.type in DYNAMIC_UI_OUTPUT_TYPES for out in ir.outputs):
        warnings.append("App uses dynamic UI (uiOutput/renderUI) which requires manual conversion.")

    if any(inp.type == FILE_INPUT_TYPE for inp in ir.inputs):
        warnings.append("App uses fileInput which is not supported in MCP Apps.")

    if ir.observers:
        warnings.append(
            f"App has {len(ir.observers)} observer(s) that may contain side effects requiring manual review.",
        )

    if any(out.type == DOWNLOAD_OUTPUT_TYPE for out in ir.outputs):
        warnings.append("App uses downloadButton/downloadHandler which requires manual conversion.")

    return warnings


def check_references(ir: AppIR) -> list[str]:
    """Flag dangling references and cycles among computed values.

    All of these are tolerated by the analysis; an undefined input simply does
    not become a tool argument, an undefined computed value is kept as a
    dangling name, and a cycle is traversed once.

    Args:
        ir: The application IR.

    Returns:
        List of warning messages.

    """
    warnings: list[str] = []
    known_inputs = {inp.id for inp in ir.inputs}

    readers = [(f"Output '{out.id}'", out.input_deps) for out in ir.outputs]
    readers.extend((f"Computed value '{comp.name}'", comp.input_deps) for comp in ir.computed)
    readers.extend((f"Observer {i} ({obs.kind})", obs.input_deps) for i, obs in enumerate(ir.observers, start=1))
    for reader, input_deps in readers:
        warnings.extend(
            f"{reader} reads input '{dep}' which is not defined; it will not become a tool argument."
            for dep in input_deps
            if dep not in known_inputs
        )

    # Same text as the closure resolver, so analyze() reports each name once
    defined = ir.computed_by_name()
    undefined = dict.fromkeys(dep for comp in ir.computed for dep in comp.computed_deps if dep not in defined)
    warnings.extend(unresolved_computed_message(name) for name in undefined)

    # computed -> computed edges, restricted to defined names
    successors: dict[str, list[str]] = {name: [] for name in defined}
    for comp in ir.computed:
        for dep in comp.computed_deps:
            if dep in defined:
                successors[dep].append(comp.name)
    try:
        topological_sort(successors)
    except CycleError as e:
        members = ", ".join(str(member) for member in e.members)
        warnings.append(f"Computed values form a dependency cycle: {members}.")

    return warnings
