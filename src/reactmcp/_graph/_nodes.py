"""Node and edge types of the dependency graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class NodeKind(StrEnum):
    """The kind of node in the dependency graph."""

    INPUT = auto()  # User-settable value (leaf)
    COMPUTED = auto()  # Derived value
    OUTPUT = auto()  # Renderer (sink)


@dataclass(frozen=True, slots=True, order=True)
class NodeId:
    """Identity of a node: its kind and its name.

    Names are namespaced by kind, so ``NodeId(COMPUTED, "plot")`` and
    ``NodeId(OUTPUT, "plot")`` are different nodes.
    """

    kind: NodeKind
    name: str

    def __str__(self) -> str:
        return f"{self.kind}:{self.name}"

    @classmethod
    def parse(cls, text: str) -> NodeId:
        """Parse the ``"kind:name"`` form produced by ``str()``.

        Raises:
            ValueError: If the kind is missing or unknown.

        """
        kind, sep, name = text.partition(":")
        if not sep or not name:
            msg = f"Expected 'kind:name', got '{text}'"
            raise ValueError(msg)
        try:
            return cls(NodeKind(kind), name)
        except ValueError as e:
            kinds = ", ".join(NodeKind)
            msg = f"Unknown node kind '{kind}' (expected one of: {kinds})"
            raise ValueError(msg) from e


@dataclass(frozen=True, slots=True)
class InputNode:
    """An input value."""

    name: str

    @property
    def id(self) -> NodeId:
        return NodeId(NodeKind.INPUT, self.name)


@dataclass(frozen=True, slots=True)
class ComputedNode:
    """A computed value with its direct dependencies."""

    name: str
    input_deps: tuple[str, ...] = ()
    computed_deps: tuple[str, ...] = ()

    @property
    def id(self) -> NodeId:
        return NodeId(NodeKind.COMPUTED, self.name)


@dataclass(frozen=True, slots=True)
class OutputNode:
    """An output renderer with its direct dependencies."""

    name: str
    input_deps: tuple[str, ...] = ()
    computed_deps: tuple[str, ...] = ()

    @property
    def id(self) -> NodeId:
        return NodeId(NodeKind.OUTPUT, self.name)


Node = InputNode | ComputedNode | OutputNode


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed edge meaning "source is read when computing target"."""

    source: NodeId
    target: NodeId

    @property
    def id(self) -> str:
        """Deterministic identity used to deduplicate edges.

        Unambiguous because IR names may not contain ``->``.
        """
        return f"{self.source}->{self.target}"
