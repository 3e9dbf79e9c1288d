"""
Assignment checking and brute-force satisfiability.

The brute-force decision builds the full truth table with numpy and is only
meant for small formulas, e.g. to cross-check the DPLL engines.
"""

import numpy as np

from satisfier.cnf import Assignment, Formula, literal_value, variables_of

MAX_BRUTE_FORCE_VARIABLES = 20


def unsatisfied_clauses(formula: Formula, assignment: Assignment) -> list[int]:
    """
    Indices of clauses without a literal made true by `assignment`.

    Unassigned variables count as not satisfying their literals.

    Args:
        formula: List of clauses
        assignment: Variable id -> value

    Returns:
        List of clause indices
    """
    return [
        i
        for i, clause in enumerate(formula)
        if not any(literal_value(lit, assignment) is True for lit in clause)
    ]


def check_assignment(formula: Formula, assignment: Assignment) -> bool:
    """Return True if every clause has at least one true literal."""
    return not unsatisfied_clauses(formula, assignment)


def truth_table(num_vars: int) -> np.ndarray:
    """
    All assignments of `num_vars` variables as a boolean matrix.

    Row r assigns variable v (1-based) the value of bit v-1 of r.

    Returns:
        Array of shape (2**num_vars, num_vars)
    """
    rows = np.arange(2**num_vars, dtype=np.int64)[:, None]
    bits = np.arange(num_vars, dtype=np.int64)[None, :]
    return ((rows >> bits) & 1).astype(bool)


def brute_force_models(formula: Formula) -> tuple[list[int], np.ndarray]:
    """
    Enumerate every satisfying assignment of the formula's variables.

    Args:
        formula: List of clauses

    Returns:
        Tuple of (variables, models); models is a boolean array with one row
        per model and one column per entry of `variables`

    Raises:
        ValueError: If the formula has too many variables to enumerate
    """
    variables = variables_of(formula)
    if len(variables) > MAX_BRUTE_FORCE_VARIABLES:
        raise ValueError(
            f"Too many variables for brute force: {len(variables)} > {MAX_BRUTE_FORCE_VARIABLES}"
        )

    table = truth_table(len(variables))
    column = {var: i for i, var in enumerate(variables)}
    satisfied = np.ones(len(table), dtype=bool)
    for clause in formula:
        clause_value = np.zeros(len(table), dtype=bool)
        for lit in clause:
            values = table[:, column[abs(lit)]]
            clause_value |= values if lit > 0 else ~values
        satisfied &= clause_value
    return variables, table[satisfied]


def brute_force_satisfiable(formula: Formula) -> bool:
    """Decide satisfiability by evaluating the whole truth table."""
    _, models = brute_force_models(formula)
    return len(models) > 0
