"""
Solve entry point: parse, apply pre-assignments, search, and name the result.

The repository is only read here (to resolve references). Storing a
satisfiable formula is left to the caller, see satisfier.session.
"""

import logging
import warnings
from collections.abc import Iterable, Mapping

from satisfier.cnf import Assignment, Formula
from satisfier.config import SatisfierConfig, get_config
from satisfier.parser import parse_formula
from satisfier.solvers.base import SolverResult, SolverStatus
from satisfier.solvers.registry import SolverRegistry
from satisfier.solvers.simplify import apply_assignment
from satisfier.storage.base import FormulaRepository
from satisfier.utils.exceptions import UnknownVariableWarning
from satisfier.variables import VariableRegistry

# Set up logging
logger = logging.getLogger(__name__)

PreAssignments = Mapping[str, bool] | Iterable[tuple[str, bool]]


class SolveOutcome:
    """
    Everything produced by one top-level solve.

    Attributes:
        result: SolverResult from the search engine (variable ids)
        assignment: Variable name -> value; on SAT this is the model
        formula: Expanded clauses before pre-assignments were applied
        registry: Registry that named the variables of `formula`
        unknown_variables: Pre-assignment names that were skipped
    """

    def __init__(
        self,
        result: SolverResult,
        assignment: dict[str, bool],
        formula: Formula,
        registry: VariableRegistry,
        unknown_variables: list[str],
    ):
        self.result = result
        self.assignment = assignment
        self.formula = formula
        self.registry = registry
        self.unknown_variables = unknown_variables

    @property
    def status(self) -> SolverStatus:
        return self.result.status

    @property
    def is_sat(self) -> bool:
        return self.result.is_sat

    @property
    def statistics(self) -> dict:
        return self.result.statistics

    def __repr__(self) -> str:
        return f"SolveOutcome({self.status.name}, {self.assignment!r})"


def resolve_pre_assignments(
    pre_assignments: PreAssignments | None, registry: VariableRegistry
) -> tuple[Assignment, list[str]]:
    """
    Map named pre-assignments to variable ids.

    Names that are not variables of the resolved formula raise an
    UnknownVariableWarning and are skipped.

    Args:
        pre_assignments: Mapping or (name, value) pairs
        registry: Registry of the parsed formula

    Returns:
        Tuple of (assignment by id, skipped names)
    """
    if pre_assignments is None:
        return {}, []
    if isinstance(pre_assignments, Mapping):
        pre_assignments = pre_assignments.items()

    assignment: Assignment = {}
    unknown = []
    for var_name, value in pre_assignments:
        var_id = registry.id_of(var_name)
        if var_id is None:
            message = f"Variable {var_name} not found in the formula"
            warnings.warn(message, UnknownVariableWarning, stacklevel=3)
            logger.warning(message)
            unknown.append(var_name)
            continue
        assignment[var_id] = bool(value)
    return assignment, unknown


def name_assignment(
    assignment: Assignment, registry: VariableRegistry, fill_unassigned: bool = False
) -> dict[str, bool]:
    """
    Convert an id assignment to names, leaving out auxiliary variables.

    Args:
        assignment: Variable id -> value
        registry: Registry that allocated the ids
        fill_unassigned: Also report never-assigned variables as False

    Returns:
        Variable name -> value, in id order
    """
    named = {}
    for var_id in sorted(assignment):
        if not registry.is_auxiliary(var_id):
            named[registry.name_of(var_id)] = assignment[var_id]
    if fill_unassigned:
        for var_name in registry.names():
            named.setdefault(var_name, False)
    return named


def solve_formula(
    text: str,
    repository: FormulaRepository | None = None,
    pre_assignments: PreAssignments | None = None,
    name: str | None = None,
    config: SatisfierConfig | None = None,
    tracer=None,
) -> SolveOutcome:
    """
    Decide satisfiability of formula text.

    Args:
        text: Formula text; quoted names of stored formulas are expanded
        repository: Repository used to resolve references
        pre_assignments: Values to fix before the search starts
        name: Name the formula is being defined under, if any
        config: Configuration; the global one is used if None
        tracer: Optional SearchTraceLogger

    Returns:
        SolveOutcome

    Raises:
        ParseError: On malformed text
        CyclicReferenceError: If stored formulas reference each other in a cycle
        RepositoryError: If the repository cannot be read
        ConfigurationError: On an unknown strategy or negation policy
    """
    config = config or get_config()

    parsed = parse_formula(
        text,
        repository,
        name=name,
        negation_policy=config.get("parser.negation_policy", "flip"),
    )
    registry = parsed.registry

    initial, unknown = resolve_pre_assignments(pre_assignments, registry)
    formula = apply_assignment(parsed.formula, initial)

    solver = SolverRegistry.create(config.get("solver.strategy", "stack"), tracer=tracer)
    result = solver.solve(formula, initial)

    fill_unassigned = bool(config.get("solver.fill_unassigned", False)) and result.is_sat
    named = name_assignment(result.assignment, registry, fill_unassigned)

    logger.info(
        f"{name or 'formula'} is {result.status.value.upper()} "
        f"({len(parsed.formula)} clauses, {len(registry)} variables, "
        f"{result.statistics.get('decisions', 0)} decisions)"
    )
    return SolveOutcome(result, named, parsed.formula, registry, unknown)
