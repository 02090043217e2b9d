"""Transitive resolution of computed-value dependencies.

An output that reads computed value ``b``, which reads computed value ``a``,
which reads input ``x``, takes ``x`` as a tool argument even though it never
mentions it. This module computes that expansion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._graph import breadth_first_closure

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._ir import AppIR, ComputedDef

logger = logging.getLogger(__name__)


def unresolved_computed_message(name: str) -> str:
    return (
        f"Computed value '{name}' is referenced as a dependency but has no definition. "
        "Its upstream inputs may be missing from the tool group."
    )


@dataclass(frozen=True, slots=True)
class ClosureResult:
    """Result of expanding a set of computed values.

    Attributes:
        names: All computed values reached, seeds included.
        order: The same names in visiting order (breadth first).
        unresolved: Reached names that have no definition, in visiting order.
        warnings: One message per unresolved name.

    """

    names: frozenset[str]
    order: tuple[str, ...]
    unresolved: tuple[str, ...] = ()
    warnings: list[str] = field(default_factory=list)


def expand_computed_closure(
    seeds: Iterable[str],
    computed_defs: Iterable[ComputedDef],
    *,
    strict: bool = False,
) -> ClosureResult:
    """Expand ``seeds`` to every computed value they transitively read.

    Names with no definition are reported in ``warnings``. They stay part of
    the closure unless ``strict`` is set, in which case they are dropped from
    ``names`` and ``order``.

    Args:
        seeds: Computed value names to start from.
        computed_defs: All computed value definitions of the application.
        strict: Exclude unresolved names from the result.

    Returns:
        A ClosureResult.

    Example:
        >>> defs = [ComputedDef(name="a"), ComputedDef(name="b", computed_deps=("a",))]
        >>> sorted(expand_computed_closure(["b"], defs).names)
        ['a', 'b']

    """
    by_name = {comp.name: comp for comp in computed_defs}

    def upstream(name: str) -> tuple[str, ...] | None:
        comp = by_name.get(name)
        return None if comp is None else comp.computed_deps

    visited, unknown = breadth_first_closure(seeds, upstream)

    warnings: list[str] = []
    for name in unknown:
        logger.debug(f"Unresolved computed value reference: {name}")
        warnings.append(unresolved_computed_message(name))

    if strict and unknown:
        missing = set(unknown)
        visited = [name for name in visited if name not in missing]

    return ClosureResult(
        names=frozenset(visited),
        order=tuple(visited),
        unresolved=tuple(unknown),
        warnings=warnings,
    )


@dataclass(frozen=True, slots=True)
class OutputDependencies:
    """The full dependency set of one output.

    Attributes:
        output_id: The output this belongs to.
        input_deps: Direct input dependencies followed by those of every
            computed value in the closure, without repeats.
        computed_deps: The closure of the output's direct computed
            dependencies, in visiting order.

    """

    output_id: str
    input_deps: tuple[str, ...]
    computed_deps: tuple[str, ...]


def resolve_output_dependencies(
    ir: AppIR,
    *,
    strict: bool = False,
) -> tuple[dict[str, OutputDependencies], list[str]]:
    """Resolve the expanded dependencies of every output in ``ir``.

    Args:
        ir: The application IR.
        strict: Passed to expand_computed_closure.

    Returns:
        Tuple of (mapping from output id to OutputDependencies, warnings).
        Warnings are not repeated when several outputs reach the same
        unresolved name.

    """
    by_name = ir.computed_by_name()
    resolved: dict[str, OutputDependencies] = {}
    warnings: dict[str, None] = {}

    for out in ir.outputs:
        closure = expand_computed_closure(out.computed_deps, ir.computed, strict=strict)
        warnings.update(dict.fromkeys(closure.warnings))

        expanded_inputs: dict[str, None] = dict.fromkeys(out.input_deps)
        for name in closure.order:
            comp = by_name.get(name)
            if comp is not None:
                expanded_inputs.update(dict.fromkeys(comp.input_deps))

        resolved[out.id] = OutputDependencies(
            output_id=out.id,
            input_deps=tuple(expanded_inputs),
            computed_deps=closure.order,
        )
        logger.debug(
            f"Output {out.id}: inputs={list(expanded_inputs)} computed={list(closure.order)}",
        )

    return resolved, list(warnings)
