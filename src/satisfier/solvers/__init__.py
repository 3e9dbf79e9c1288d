"""
Search engines with a unified interface.
"""

from .base import SolverBase, SolverResult, SolverStatus
from .dpll import RecursiveDPLLSolver, StackDPLLSolver
from .registry import SolverRegistry, register_solver
from .simplify import apply_assignment, assign, pure_literal_eliminate, unit_propagate

__all__ = [
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "StackDPLLSolver",
    "RecursiveDPLLSolver",
    "assign",
    "apply_assignment",
    "unit_propagate",
    "pure_literal_eliminate",
]
