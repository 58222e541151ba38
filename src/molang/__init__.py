"""Molang - compiles Molang expressions into Python functions bound to an instance."""

from molang.allocation import AllocationTracker, TrackedState
from molang.compiled import CompiledMolang
from molang.errors import (
    CompilerBackendError,
    ContextArityError,
    MolangCompileError,
    MolangMemoryError,
    VariableSizeError,
)
from molang.instance import MolangInstance
from molang.parsing import MolangParser
from molang.queries import DEFAULT_QUERIES, Query, runtime_query
from molang.scratch import ReentrancyState, ScratchSpace
from molang.variables import ActorVariable, VariableNamespace

__all__ = [
    # Main API
    "MolangInstance",
    "CompiledMolang",
    "MolangParser",
    # Queries
    "Query",
    "DEFAULT_QUERIES",
    "runtime_query",
    # Storage
    "ActorVariable",
    "VariableNamespace",
    "ScratchSpace",
    "ReentrancyState",
    # Allocation accounting
    "AllocationTracker",
    "TrackedState",
    # Errors
    "MolangCompileError",
    "ContextArityError",
    "VariableSizeError",
    "MolangMemoryError",
    "CompilerBackendError",
]

__version__ = "0.1.0"
