"""
Variable registry.

Interns variable names to dense positive ids in first-use order. A single
registry instance is shared by one top-level parse and every nested
expansion of a referenced formula, so equal names always get equal ids.
"""

import logging

# Set up logging
logger = logging.getLogger(__name__)

AUX_PREFIX = "%"


class VariableRegistry:
    """
    Bijection between variable names and ids 1..n.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._ids: dict[str, int] = {}
        self._names: dict[int, str] = {}
        self._auxiliary: set[int] = set()

    def intern(self, name: str) -> int:
        """
        Return the id for `name`, allocating the next one on first use.

        Args:
            name: Variable name as written between quotes

        Returns:
            Positive variable id
        """
        var_id = self._ids.get(name)
        if var_id is None:
            var_id = len(self._names) + 1
            self._ids[name] = var_id
            self._names[var_id] = name
            logger.debug(f"Interned variable '{name}' as {var_id}")
        return var_id

    def fresh(self, hint: str = "aux") -> int:
        """
        Allocate an auxiliary variable that no user name can collide with.

        Args:
            hint: Readable part of the generated name

        Returns:
            Positive variable id
        """
        var_id = len(self._names) + 1
        # Auxiliary names are display-only and never resolvable through intern()
        self._names[var_id] = f"{AUX_PREFIX}{hint}#{var_id}"
        self._auxiliary.add(var_id)
        return var_id

    def is_auxiliary(self, var_id: int) -> bool:
        return var_id in self._auxiliary

    def id_of(self, name: str) -> int | None:
        return self._ids.get(name)

    def name_of(self, var_id: int) -> str:
        return self._names[var_id]

    def names(self, include_auxiliary: bool = False) -> list[str]:
        """Names in id order."""
        return [
            name
            for var_id, name in self._names.items()
            if include_auxiliary or var_id not in self._auxiliary
        ]

    def reverse_map(self) -> dict[int, str]:
        """Copy of the id -> name map."""
        return dict(self._names)

    def __contains__(self, name: str) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"VariableRegistry({len(self)} variables)"
