"""
Clause simplification: variable assignment, unit propagation and pure
literal elimination.

None of these functions mutate the formula they are given. Sibling search
branches start from the same pre-branch formula, so every rewrite returns
fresh clause lists.
"""

from satisfier.cnf import Assignment, Formula, literal_for


def assign(formula: Formula, variable: int, value: bool) -> Formula:
    """
    Simplify a formula under `variable = value`.

    Clauses containing the satisfied literal are dropped, the falsified
    literal is removed from the remaining clauses, and all other clauses are
    copied unchanged.

    Args:
        formula: List of clauses
        variable: Positive variable id
        value: Truth value to give the variable

    Returns:
        New list of clauses that no longer mentions `variable`
    """
    true_lit = literal_for(variable, value)
    false_lit = -true_lit

    new_formula = []
    for clause in formula:
        if true_lit in clause:
            continue
        new_formula.append([lit for lit in clause if lit != false_lit])
    return new_formula


def has_empty_clause(formula: Formula) -> bool:
    return any(len(clause) == 0 for clause in formula)


def unit_propagate(
    formula: Formula, assignment: Assignment, stats: dict | None = None
) -> tuple[Formula, bool]:
    """
    Repeatedly fix the first unit clause until none remain.

    Args:
        formula: List of clauses
        assignment: Assignment to record forced values in (updated in place)
        stats: Optional statistics dict; 'propagations' is incremented

    Returns:
        Tuple of (simplified formula, ok); ok is False when a clause became
        empty, i.e. the formula conflicts with the forced values
    """
    if has_empty_clause(formula):
        return formula, False

    while True:
        unit = next((clause[0] for clause in formula if len(clause) == 1), None)
        if unit is None:
            return formula, True

        variable = abs(unit)
        value = unit > 0
        assignment[variable] = value
        if stats is not None:
            stats["propagations"] = stats.get("propagations", 0) + 1

        formula = assign(formula, variable, value)
        if has_empty_clause(formula):
            return formula, False


def pure_literal_eliminate(
    formula: Formula, assignment: Assignment, stats: dict | None = None
) -> Formula:
    """
    Fix every variable that occurs with a single polarity.

    Literal occurrences are counted in one pass and pure variables are fixed
    in order of first occurrence. This is not iterated to a fixed point:
    literals that only become pure after this pass are left for the next call.

    Args:
        formula: List of clauses
        assignment: Assignment to record fixed values in (updated in place)
        stats: Optional statistics dict; 'pure_literals' is incremented

    Returns:
        Simplified formula
    """
    literal_count: dict[int, int] = {}
    for clause in formula:
        for lit in clause:
            literal_count[lit] = literal_count.get(lit, 0) + 1

    for lit, count in literal_count.items():
        if count > 0 and literal_count.get(-lit, 0) == 0:
            variable = abs(lit)
            value = lit > 0
            assignment[variable] = value
            if stats is not None:
                stats["pure_literals"] = stats.get("pure_literals", 0) + 1
            formula = assign(formula, variable, value)
    return formula


def apply_assignment(formula: Formula, assignment: Assignment) -> Formula:
    """Simplify a formula under every entry of `assignment`, in order."""
    for variable, value in assignment.items():
        formula = assign(formula, variable, value)
    return formula
