"""
File-based formula repository.

This module provides a repository that persists formulas, their satisfying
assignments and comments in a single JSON file.
"""

import json
import logging
import os

from satisfier.storage.base import FormulaRecord, FormulaRepository
from satisfier.utils.exceptions import RepositoryError

# Set up logging
logger = logging.getLogger(__name__)


class JsonFormulaRepository(FormulaRepository):
    """
    JSON file repository.

    The file holds three maps keyed by formula name::

        {"formulas": {...}, "assignments": {...}, "comments": {...}}

    A missing file is treated as an empty repository. The whole file is
    rewritten on every store.
    """

    def __init__(self, data_path: str):
        """
        Initialize file repository.

        Args:
            data_path: Path of the JSON file
        """
        self.data_path = data_path
        self.formulas: dict[str, str] = {}
        self.assignments: dict[str, dict[str, bool]] = {}
        self.comments: dict[str, str] = {}

        if os.path.exists(data_path):
            self._load()
        else:
            logger.info(f"No repository at {data_path}, starting empty")

    def _load(self) -> None:
        """Load all records from disk."""
        try:
            with open(self.data_path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryError(f"Cannot read repository ({e})", self.data_path) from e

        if not isinstance(data, dict):
            raise RepositoryError("Repository root must be an object", self.data_path)

        formulas = self._section(data, "formulas")
        assignments = self._section(data, "assignments")
        comments = self._section(data, "comments")

        for name, text in formulas.items():
            if not isinstance(text, str):
                raise RepositoryError(f"Formula '{name}' is not a string", self.data_path)
        for name, values in assignments.items():
            if not isinstance(values, dict):
                raise RepositoryError(f"Assignment of '{name}' is not an object", self.data_path)
        for name, comment in comments.items():
            if not isinstance(comment, str):
                raise RepositoryError(f"Comment of '{name}' is not a string", self.data_path)

        self.formulas = dict(formulas)
        self.assignments = {name: dict(values) for name, values in assignments.items()}
        self.comments = dict(comments)
        logger.debug(f"Loaded {len(self.formulas)} formulas from {self.data_path}")

    def _section(self, data: dict, key: str) -> dict:
        section = data.get(key)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise RepositoryError(f"Repository '{key}' must be an object", self.data_path)
        return section

    def _save(self, formulas=None, assignments=None, comments=None) -> None:
        """Write records to disk; the current ones are used where none are given."""
        data = {
            "formulas": self.formulas if formulas is None else formulas,
            "assignments": self.assignments if assignments is None else assignments,
            "comments": self.comments if comments is None else comments,
        }
        try:
            directory = os.path.dirname(os.path.abspath(self.data_path))
            os.makedirs(directory, exist_ok=True)
            with open(self.data_path, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
        except OSError as e:
            raise RepositoryError(f"Cannot write repository ({e})", self.data_path) from e

    def lookup(self, name: str) -> tuple[str | None, bool]:
        if name in self.formulas:
            return self.formulas[name], True
        return None, False

    def store(
        self,
        name: str,
        text: str,
        assignment: dict[str, bool],
        comment: str | None = None,
    ) -> None:
        formulas = {**self.formulas, name: text}
        assignments = {**self.assignments, name: dict(assignment)}
        comments = dict(self.comments)
        if comment:
            comments[name] = comment
        else:
            comments.pop(name, None)

        # In-memory records only change once the file is written
        self._save(formulas, assignments, comments)
        self.formulas = formulas
        self.assignments = assignments
        self.comments = comments
        logger.info(f"Stored formula '{name}' in {self.data_path}")

    def enumerate(self) -> list[FormulaRecord]:
        return [
            FormulaRecord(
                name=name,
                text=self.formulas[name],
                assignment=dict(self.assignments.get(name, {})),
                comment=self.comments.get(name),
            )
            for name in sorted(self.formulas)
        ]
