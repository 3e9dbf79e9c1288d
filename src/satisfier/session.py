"""
Formula session: check named formulas against a repository and store the
satisfiable ones.
"""

import logging

from satisfier.config import SatisfierConfig, get_config
from satisfier.satisfier import PreAssignments, SolveOutcome, solve_formula
from satisfier.storage.base import FormulaRecord, FormulaRepository
from satisfier.storage.factory import create_repository
from satisfier.utils.exceptions import SatisfierError
from satisfier.utils.logging_utils import SearchTraceLogger
from satisfier.utils.verifier import unsatisfied_clauses

# Set up logging
logger = logging.getLogger(__name__)


class FormulaSession:
    """
    Checks formulas by name and keeps the repository up to date.

    A formula found satisfiable is stored (or overwritten) together with its
    named assignment and comment. Unsatisfiable formulas are never stored.
    """

    def __init__(
        self,
        repository: FormulaRepository | None = None,
        config: SatisfierConfig | None = None,
    ):
        """
        Initialize the session.

        Args:
            repository: Repository to use; created from configuration if None
            config: Configuration; the global one is used if None
        """
        self.config = config or get_config()
        if repository is None:
            repository = create_repository(
                self.config.get("repository.type", "json"),
                self.config.get("repository.path"),
            )
        self.repository = repository

    def check(
        self,
        name: str,
        text: str,
        pre_assignments: PreAssignments | None = None,
        comment: str | None = None,
    ) -> SolveOutcome:
        """
        Solve a formula and store it if it is satisfiable.

        Args:
            name: Name to store the formula under
            text: Formula text
            pre_assignments: Values to fix before the search starts
            comment: Optional comment stored with the formula

        Returns:
            SolveOutcome

        Raises:
            SatisfierError: If a reported model does not satisfy the formula;
                nothing is stored in that case
        """
        trace_dir = self.config.get("logging.trace_dir")
        tracer = SearchTraceLogger(trace_dir, name) if trace_dir else None
        try:
            outcome = solve_formula(
                text,
                self.repository,
                pre_assignments=pre_assignments,
                name=name,
                config=self.config,
                tracer=tracer,
            )
        finally:
            if tracer is not None:
                tracer.close()

        if outcome.is_sat:
            unsatisfied = unsatisfied_clauses(outcome.formula, outcome.result.assignment)
            if unsatisfied:
                raise SatisfierError(
                    f"Assignment found for '{name}' leaves clauses {unsatisfied} unsatisfied"
                )
            self.repository.store(name, text, outcome.assignment, comment)
        else:
            logger.info(f"Not storing unsatisfiable formula '{name}'")
        return outcome

    def formulas(self) -> list[FormulaRecord]:
        return self.repository.enumerate()

    def close(self) -> None:
        self.repository.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
