"""
Memory-based formula repository.
"""

from satisfier.storage.base import FormulaRecord, FormulaRepository


class MemoryFormulaRepository(FormulaRepository):
    """
    Simple in-memory repository.

    Records live in a dict keyed by name and are lost when the process exits.
    """

    def __init__(self, records: dict[str, str] | None = None):
        """
        Initialize memory repository.

        Args:
            records: Optional name -> raw text map to preload
        """
        self.records: dict[str, FormulaRecord] = {}
        for name, text in (records or {}).items():
            self.records[name] = FormulaRecord(name=name, text=text)

    def lookup(self, name: str) -> tuple[str | None, bool]:
        record = self.records.get(name)
        if record is None:
            return None, False
        return record.text, True

    def store(
        self,
        name: str,
        text: str,
        assignment: dict[str, bool],
        comment: str | None = None,
    ) -> None:
        self.records[name] = FormulaRecord(
            name=name, text=text, assignment=dict(assignment), comment=comment
        )

    def enumerate(self) -> list[FormulaRecord]:
        return [self.records[name] for name in sorted(self.records)]

    def clear(self) -> None:
        """Remove all stored formulas."""
        self.records = {}
