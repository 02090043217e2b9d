"""Turn connected components of the dependency graph into tool groups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._graph import NodeKind
from ._ir import InputDef, OutputDef

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ._graph import NodeId
    from ._ir import AppIR


@dataclass(frozen=True, slots=True)
class ToolGroup:
    """A self-contained unit of the application, callable as one tool.

    Attributes:
        name: Generated tool name (``update_...``, ``set_...`` or ``unnamed_group``).
        description: Generated one-line description.
        input_args: Inputs the tool takes, in IR declaration order.
        output_targets: Outputs the tool produces, in IR declaration order.
        computed_names: Computed values inside the group, kept for traceability.

    """

    name: str
    description: str
    input_args: tuple[InputDef, ...] = ()
    output_targets: tuple[OutputDef, ...] = ()
    computed_names: tuple[str, ...] = ()

    @property
    def input_ids(self) -> list[str]:
        return [inp.id for inp in self.input_args]

    @property
    def output_ids(self) -> list[str]:
        return [out.id for out in self.output_targets]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible data."""
        return {
            "name": self.name,
            "description": self.description,
            "input_args": [inp.model_dump(mode="json") for inp in self.input_args],
            "output_targets": [out.model_dump(mode="json") for out in self.output_targets],
            "computed_names": list(self.computed_names),
        }


def _in_declaration_order(names: set[str], declared: Sequence[str]) -> list[str]:
    """Order ``names`` by ``declared``; names never declared follow, sorted."""
    ordered = [name for name in declared if name in names]
    ordered.extend(sorted(names.difference(declared)))
    return ordered


def tool_name(output_ids: Sequence[str], input_ids: Sequence[str]) -> str:
    """Generate a tool name from the ids of a group.

    Example:
        >>> tool_name(["scatter", "stats"], ["species"])
        'update_scatter_and_stats'
        >>> tool_name([], ["a", "b"])
        'set_a_and_b'

    """
    if output_ids:
        return "update_" + "_and_".join(output_ids)
    if input_ids:
        return "set_" + "_and_".join(input_ids)
    return "unnamed_group"


def tool_description(output_ids: Sequence[str], input_labels: Sequence[str]) -> str:
    return f"Update {' and '.join(output_ids)} based on {', '.join(input_labels)}"


def materialize(component: Iterable[NodeId], ir: AppIR) -> ToolGroup:
    """Build the ToolGroup for one connected component.

    Inputs and outputs are resolved against the IR and ordered by declaration,
    so the generated name is stable across runs. An id with no definition in
    the IR gets a stub definition of type ``unknown``.

    Args:
        component: Node ids of the component.
        ir: The application IR.

    Returns:
        The ToolGroup. Degenerate components (a lone input, a lone computed
        value) still produce one.

    """
    input_ids: set[str] = set()
    output_ids: set[str] = set()
    computed_names: set[str] = set()
    for node_id in component:
        match node_id.kind:
            case NodeKind.INPUT:
                input_ids.add(node_id.name)
            case NodeKind.OUTPUT:
                output_ids.add(node_id.name)
            case NodeKind.COMPUTED:
                computed_names.add(node_id.name)

    inputs_by_id = ir.inputs_by_id()
    outputs_by_id = ir.outputs_by_id()
    ordered_inputs = _in_declaration_order(input_ids, list(inputs_by_id))
    ordered_outputs = _in_declaration_order(output_ids, list(outputs_by_id))
    ordered_computed = _in_declaration_order(computed_names, [comp.name for comp in ir.computed])

    input_args = tuple(inputs_by_id.get(i) or InputDef(id=i, type="unknown", label=i) for i in ordered_inputs)
    output_targets = tuple(outputs_by_id.get(o) or OutputDef(id=o, type="unknown") for o in ordered_outputs)

    return ToolGroup(
        name=tool_name(ordered_outputs, ordered_inputs),
        description=tool_description(ordered_outputs, [inp.display_label for inp in input_args]),
        input_args=input_args,
        output_targets=output_targets,
        computed_names=tuple(ordered_computed),
    )
