"""The application IR consumed by the analysis engine."""

from __future__ import annotations

from collections import Counter
from enum import StrEnum, auto
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, model_validator

from ._definitions import ComputedDef, InputDef, ObserverDef, OutputDef

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Self


class Complexity(StrEnum):
    """Rough conversion difficulty of an application."""

    SIMPLE = auto()
    MEDIUM = auto()
    COMPLEX = auto()


def _duplicates(names: Iterable[str]) -> list[str]:
    return [name for name, count in Counter(names).items() if count > 1]


class AppIR(BaseModel):
    """Structural description of a reactive application.

    The four collections are ordered sequences: declaration order drives tool
    naming, so it must survive loading and serialization.

    Attributes:
        inputs: Input definitions in declaration order.
        outputs: Output definitions in declaration order.
        computed: Computed value definitions in declaration order.
        observers: Side-effect subscriptions.
        source: Where the IR was extracted from (informational only).

    Example:
        >>> ir = AppIR(
        ...     inputs=[InputDef(id="x", type="select", label="Choose:")],
        ...     outputs=[OutputDef(id="result", type="text", input_deps=("x",))],
        ... )
        >>> ir.complexity
        <Complexity.SIMPLE: 'simple'>

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    inputs: tuple[InputDef, ...] = ()
    outputs: tuple[OutputDef, ...] = ()
    computed: tuple[ComputedDef, ...] = ()
    observers: tuple[ObserverDef, ...] = ()
    source: str | None = None

    @model_validator(mode="after")
    def _check_unique_names(self) -> Self:
        for what, names in (
            ("input id", (inp.id for inp in self.inputs)),
            ("output id", (out.id for out in self.outputs)),
            ("computed value name", (comp.name for comp in self.computed)),
        ):
            duplicates = _duplicates(names)
            if duplicates:
                msg = f"Duplicate {what}(s): {', '.join(duplicates)}"
                raise ValueError(msg)
        return self

    def get_input(self, input_id: str) -> InputDef | None:
        """Return the input with the given id, or None."""
        return next((inp for inp in self.inputs if inp.id == input_id), None)

    def get_output(self, output_id: str) -> OutputDef | None:
        """Return the output with the given id, or None."""
        return next((out for out in self.outputs if out.id == output_id), None)

    def inputs_by_id(self) -> dict[str, InputDef]:
        """Map input ids to their definitions."""
        return {inp.id: inp for inp in self.inputs}

    def outputs_by_id(self) -> dict[str, OutputDef]:
        """Map output ids to their definitions."""
        return {out.id: out for out in self.outputs}

    def computed_by_name(self) -> dict[str, ComputedDef]:
        """Map computed value names to their definitions."""
        return {comp.name: comp for comp in self.computed}

    @property
    def complexity(self) -> Complexity:
        """Classify how much manual work a conversion is likely to need."""
        n_inputs = len(self.inputs)
        n_computed = len(self.computed)

        if n_inputs <= 3 and n_computed == 0 and not self.observers:  # noqa: PLR2004
            return Complexity.SIMPLE
        if n_inputs <= 8 and n_computed <= 3:  # noqa: PLR2004
            return Complexity.MEDIUM
        return Complexity.COMPLEX
