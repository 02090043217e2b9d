"""Definitions of the entities that make up an application IR."""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

# Separator of the two ends in an edge id ("input:x->output:plot")
EDGE_ARROW = "->"


def _check_name(value: str) -> str:
    if EDGE_ARROW in value:
        msg = f"Name must not contain '{EDGE_ARROW}': {value!r}"
        raise ValueError(msg)
    return value


Name = Annotated[str, AfterValidator(_check_name)]


def _dedupe(names: tuple[str, ...]) -> tuple[str, ...]:
    """Remove repeated names, keeping the first occurrence of each."""
    return tuple(dict.fromkeys(names))


class _Definition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class InputDef(_Definition):
    """A user-settable input value.

    Attributes:
        id: Input identifier, unique among inputs.
        type: Control kind derived from the source widget (e.g. ``select``,
            ``numeric``, ``file``). Opaque to the analysis.
        label: Human readable label, if the source declared one.
        raw_args: Literal arguments of the source widget call, kept for the
            generation step.

    """

    id: Annotated[Name, Field(min_length=1)]
    type: str = "unknown"
    label: str | None = None
    raw_args: dict[str, Any] = Field(default_factory=dict)

    @property
    def display_label(self) -> str:
        """The label, falling back to the id."""
        return self.label if self.label is not None else self.id


class OutputDef(_Definition):
    """An output renderer and the names it reads directly.

    Output ids live in their own namespace, so an output may share its id with
    a computed value.
    """

    id: Annotated[Name, Field(min_length=1)]
    type: str = "unknown"
    input_deps: tuple[Name, ...] = ()
    computed_deps: tuple[Name, ...] = ()

    @field_validator("input_deps", "computed_deps")
    @classmethod
    def _unique_deps(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _dedupe(value)


class ComputedDef(_Definition):
    """A named derived value (reactive expression)."""

    name: Annotated[Name, Field(min_length=1)]
    input_deps: tuple[Name, ...] = ()
    computed_deps: tuple[Name, ...] = ()

    @field_validator("input_deps", "computed_deps")
    @classmethod
    def _unique_deps(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _dedupe(value)


class ObserverDef(_Definition):
    """A side-effect subscription (``observe`` / ``observeEvent``).

    Observers never join the dependency graph; they are tracked for diagnostics.
    """

    kind: str = "observe"
    input_deps: tuple[Name, ...] = ()

    @field_validator("input_deps")
    @classmethod
    def _unique_deps(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _dedupe(value)
