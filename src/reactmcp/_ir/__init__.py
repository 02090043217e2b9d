"""Intermediate Representation (IR) module for reactmcp.

The IR is the structural description of a reactive application produced by
the upstream extraction step. It is pure data: the analysis engine reads it but
never parses source text itself.

Key types:
- InputDef, OutputDef, ComputedDef, ObserverDef: the application's entities
- AppIR: ordered collections of those entities, validated on construction
- Complexity: rough conversion difficulty
"""

from ._app_ir import AppIR, Complexity
from ._definitions import ComputedDef, InputDef, ObserverDef, OutputDef

__all__ = ["AppIR", "Complexity", "ComputedDef", "InputDef", "ObserverDef", "OutputDef"]
