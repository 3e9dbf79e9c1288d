"""
Base classes for formula repositories.

This module defines the lookup/store/enumerate contract the solver core uses
to resolve references to named formulas and to persist satisfiable ones.
"""

import abc
from dataclasses import dataclass, field


@dataclass
class FormulaRecord:
    """A named formula together with the assignment that satisfied it."""

    name: str
    text: str
    assignment: dict[str, bool] = field(default_factory=dict)
    comment: str | None = None


class FormulaRepository(abc.ABC):
    """Abstract base class for all formula repositories."""

    @abc.abstractmethod
    def lookup(self, name: str) -> tuple[str | None, bool]:
        """
        Look up the raw text of a named formula.

        Args:
            name: Formula name

        Returns:
            Tuple of (raw_text, found); raw_text is None when not found
        """

    @abc.abstractmethod
    def store(
        self,
        name: str,
        text: str,
        assignment: dict[str, bool],
        comment: str | None = None,
    ) -> None:
        """
        Create or overwrite a formula record.

        Args:
            name: Formula name
            text: Raw formula text as entered
            assignment: Satisfying assignment by variable name
            comment: Optional free-form comment
        """

    @abc.abstractmethod
    def enumerate(self) -> list[FormulaRecord]:
        """
        List all stored formulas.

        Returns:
            Records sorted by name
        """

    def get(self, name: str) -> FormulaRecord | None:
        """Return the full record for `name`, or None."""
        for record in self.enumerate():
            if record.name == name:
                return record
        return None

    def __contains__(self, name: str) -> bool:
        return self.lookup(name)[1]

    def close(self) -> None:
        """Close the repository and perform cleanup."""

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close the repository."""
        self.close()
