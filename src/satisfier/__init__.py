"""
Satisfier: satisfiability checking for CNF formulas that may reference
previously stored formulas.
"""

from satisfier.parser import ParsedFormula, parse_formula, parse_pre_assignments
from satisfier.satisfier import SolveOutcome, solve_formula
from satisfier.session import FormulaSession
from satisfier.solvers import SolverRegistry, SolverResult, SolverStatus
from satisfier.storage import (
    FormulaRecord,
    FormulaRepository,
    JsonFormulaRepository,
    MemoryFormulaRepository,
    create_repository,
)
from satisfier.utils.exceptions import (
    ConfigurationError,
    CyclicReferenceError,
    ParseError,
    RepositoryError,
    SatisfierError,
    UnknownVariableWarning,
)
from satisfier.variables import VariableRegistry

__version__ = "0.1.0"
