"""
CNF data model.

A literal is a non-zero int: positive for an unnegated variable, negative for
a negated one. A clause is a list of literals (a disjunction) and a formula is
a list of clauses (a conjunction). An empty formula is satisfied; an empty
clause is a contradiction.
"""

from typing import Dict, Iterable, List

# A clause is a list of integers. Positive = var is True, Negative = var is False
Literal = int
Clause = List[Literal]
Formula = List[Clause]
Assignment = Dict[int, bool]


def literal_for(variable: int, value: bool) -> Literal:
    """Return the literal that is made true by setting `variable` to `value`."""
    return variable if value else -variable


def literal_value(literal: Literal, assignment: Assignment):
    """Truth value of `literal` under `assignment`, or None if unassigned."""
    value = assignment.get(abs(literal))
    if value is None:
        return None
    return value if literal > 0 else not value


def variables_of(formula: Formula) -> List[int]:
    """
    Variables occurring in a formula, in first-occurrence order.

    Args:
        formula: List of clauses

    Returns:
        List of distinct variable ids
    """
    seen = {}
    for clause in formula:
        for lit in clause:
            seen.setdefault(abs(lit), None)
    return list(seen)


def copy_formula(formula: Iterable[Clause]) -> Formula:
    """Copy a formula so that no clause list is shared with the input."""
    return [list(clause) for clause in formula]


def negate_clauses(formula: Formula) -> Formula:
    """Flip the sign of every literal of every clause, clause by clause."""
    return [[-lit for lit in clause] for clause in formula]


def format_formula(formula: Formula, names: Dict[int, str] = None) -> str:
    """
    Render a formula in the surface syntax, for logging and display.

    Args:
        formula: List of clauses
        names: Optional id -> name map; raw ids are used when missing

    Returns:
        Formula text such as ("a" OR NOT "b") AND ("c")
    """
    names = names or {}

    def render(lit: Literal) -> str:
        name = names.get(abs(lit), str(abs(lit)))
        return f'NOT "{name}"' if lit < 0 else f'"{name}"'

    return " AND ".join(
        "(" + " OR ".join(render(lit) for lit in clause) + ")" for clause in formula
    )
