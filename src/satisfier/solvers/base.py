"""
Base interface for the search engines.
Defines the result object and the interface every strategy implements.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from satisfier.cnf import Assignment, Formula


class SolverStatus(Enum):
    """Enum representing the verdict of a solver run."""

    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"


class SolverResult:
    """
    Result object returned by all search engines.

    On UNSATISFIABLE, `assignment` holds the partial assignment of the last
    conflicting branch. It is not a model.
    """

    def __init__(
        self,
        status: SolverStatus,
        assignment: Assignment | None = None,
        runtime: float = 0.0,
        statistics: dict[str, Any] | None = None,
    ):
        self.status = status
        self.assignment = assignment if assignment is not None else {}
        self.runtime = runtime
        self.statistics = statistics or {}

    @property
    def is_sat(self) -> bool:
        """Returns True if the formula is satisfiable."""
        return self.status == SolverStatus.SATISFIABLE

    @property
    def is_unsat(self) -> bool:
        """Returns True if the formula is unsatisfiable."""
        return self.status == SolverStatus.UNSATISFIABLE

    def __str__(self) -> str:
        """String representation of the result."""
        status_str = str(self.status.value).upper()
        decisions = self.statistics.get("decisions", 0)
        if self.status == SolverStatus.SATISFIABLE:
            return f"SAT Result: {status_str} ({len(self.assignment)} assigned, {decisions} decisions, {self.runtime:.4f}s)"
        return f"SAT Result: {status_str} (proved in {self.runtime:.4f}s, {decisions} decisions)"

    def __repr__(self) -> str:
        return f"SolverResult({self.status.name}, {self.assignment!r})"


class SolverBase(ABC):
    """
    Abstract base class for search engine implementations.
    All strategies must inherit from this class.
    """

    solver_name = "base"

    @abstractmethod
    def solve(self, formula: Formula, assignment: Assignment | None = None) -> SolverResult:
        """
        Decide satisfiability of a formula.

        Args:
            formula: List of clauses; it is never modified
            assignment: Values already fixed before the search starts, such as
                pre-assignments. They are kept in the returned assignment.

        Returns:
            SolverResult with the verdict and the assignment found
        """

    @abstractmethod
    def get_statistics(self) -> dict[str, Any]:
        """
        Get statistics of the last run.

        Returns:
            Dictionary of statistics
        """
