"""
DPLL search engines.

Every search node runs unit propagation, stops on a conflict, runs one
pure-literal pass, succeeds on an empty formula, and otherwise branches on the
variable of the first literal of the first clause, trying True before False.

Two strategies are provided and return the same verdict and assignment:
an explicit LIFO work stack (the default) and plain recursion.
"""

import logging
import time
from abc import abstractmethod
from typing import Any, NamedTuple

from satisfier.cnf import Assignment, Formula
from satisfier.solvers.base import SolverBase, SolverResult, SolverStatus
from satisfier.solvers.registry import register_solver
from satisfier.solvers.simplify import assign, pure_literal_eliminate, unit_propagate

# Set up logging
logger = logging.getLogger(__name__)

CONFLICT = "conflict"
SATISFIED = "satisfied"
BRANCH = "branch"


class Frame(NamedTuple):
    """An independent search node: its own formula and assignment snapshot."""

    formula: Formula
    assignment: Assignment
    depth: int
    decision: tuple[int, bool] | None = None


class DPLLSolverBase(SolverBase):
    """
    Shared node processing for the DPLL strategies.
    """

    def __init__(self, tracer=None, **kwargs):
        """
        Initialize the solver.

        Args:
            tracer: Optional SearchTraceLogger receiving decision, conflict
                and result events
            **kwargs: Additional attributes to set on the solver
        """
        self.tracer = tracer
        for key, value in kwargs.items():
            setattr(self, key, value)
        self.stats = self._new_statistics()

    def _new_statistics(self) -> dict[str, Any]:
        return {
            "decisions": 0,
            "propagations": 0,
            "pure_literals": 0,
            "conflicts": 0,
            "max_depth": 0,
            "solver_name": self.solver_name,
        }

    def get_statistics(self) -> dict[str, Any]:
        return dict(self.stats)

    def _enter(self, frame: Frame) -> None:
        """Account for a node about to be processed."""
        if frame.depth > self.stats["max_depth"]:
            self.stats["max_depth"] = frame.depth
        if frame.decision is not None:
            variable, value = frame.decision
            self.stats["decisions"] += 1
            if self.tracer is not None:
                self.tracer.log_decision(frame.depth, variable, value)

    def _process(self, frame: Frame) -> tuple[str, Formula, int | None]:
        """
        Run propagation and elimination on a node.

        The frame's assignment is extended in place with every forced value.

        Returns:
            Tuple of (outcome, simplified formula, branch variable)
        """
        formula, ok = unit_propagate(frame.formula, frame.assignment, self.stats)
        if not ok:
            self.stats["conflicts"] += 1
            if self.tracer is not None:
                self.tracer.log_conflict(frame.depth, len(frame.assignment))
            return CONFLICT, formula, None

        formula = pure_literal_eliminate(formula, frame.assignment, self.stats)
        if not formula:
            return SATISFIED, formula, None

        return BRANCH, formula, abs(formula[0][0])

    def solve(self, formula: Formula, assignment: Assignment | None = None) -> SolverResult:
        self.stats = self._new_statistics()
        start_time = time.time()

        root = Frame([list(clause) for clause in formula], dict(assignment or {}), 0)
        satisfiable, result_assignment = self._search(root)

        status = SolverStatus.SATISFIABLE if satisfiable else SolverStatus.UNSATISFIABLE
        result = SolverResult(
            status=status,
            assignment=result_assignment,
            runtime=time.time() - start_time,
            statistics=self.get_statistics(),
        )
        if self.tracer is not None:
            self.tracer.log_result(status.value, result.runtime, result.statistics)
        logger.debug(f"{self.solver_name}: {result}")
        return result

    @abstractmethod
    def _search(self, root: Frame) -> tuple[bool, Assignment]:
        """
        Search from `root`.

        Returns:
            Tuple of (satisfiable, assignment)
        """


@register_solver("stack")
class StackDPLLSolver(DPLLSolverBase):
    """
    DPLL over an explicit work stack of independent frames.

    Memory grows with the number of pending frames rather than with the call
    stack, so deep formulas do not hit the interpreter's recursion limit.
    """

    def _search(self, root: Frame) -> tuple[bool, Assignment]:
        stack = [root]
        last_assignment = root.assignment

        while stack:
            frame = stack.pop()
            self._enter(frame)

            outcome, formula, variable = self._process(frame)
            if outcome == CONFLICT:
                last_assignment = frame.assignment
                continue
            if outcome == SATISFIED:
                return True, frame.assignment

            # False is pushed first so that True is popped and tried first
            for value in (False, True):
                child_assignment = dict(frame.assignment)
                child_assignment[variable] = value
                stack.append(
                    Frame(
                        assign(formula, variable, value),
                        child_assignment,
                        frame.depth + 1,
                        (variable, value),
                    )
                )

        return False, last_assignment


@register_solver("recursive")
class RecursiveDPLLSolver(DPLLSolverBase):
    """
    Depth-first recursive DPLL returning on the first success.

    Recursion depth is bounded by the number of variables.
    """

    def _search(self, frame: Frame) -> tuple[bool, Assignment]:
        self._enter(frame)

        outcome, formula, variable = self._process(frame)
        if outcome == CONFLICT:
            return False, frame.assignment
        if outcome == SATISFIED:
            return True, frame.assignment

        result = frame.assignment
        for value in (True, False):
            child_assignment = dict(frame.assignment)
            child_assignment[variable] = value
            child = Frame(
                assign(formula, variable, value),
                child_assignment,
                frame.depth + 1,
                (variable, value),
            )
            satisfiable, result = self._search(child)
            if satisfiable:
                return True, result
        return False, result
