"""
Custom exceptions for the satisfier package.

This module defines exception classes for parsing, reference expansion and
repository access, allowing for more detailed error handling and reporting.
Branch conflicts inside the search are not exceptions: they are reported
through explicit result values.
"""

from typing import Optional, Sequence


class SatisfierError(Exception):
    """Base class for all satisfier specific exceptions."""

    def __init__(self, message: str = None):
        """
        Initialize the exception.

        Args:
            message: Optional error message
        """
        self.message = message
        super().__init__(message)


class ParseError(SatisfierError):
    """
    Exception raised when formula or pre-assignment text is malformed.

    The offending position is reported when it is known.
    """

    def __init__(self, message: str = "Malformed formula", text: Optional[str] = None,
                 position: Optional[int] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            text: The text being parsed
            position: Character offset where parsing failed
        """
        self.text = text
        self.position = position

        if position is not None:
            message = f"{message} at position {position}"

        super().__init__(message)


class CyclicReferenceError(SatisfierError):
    """
    Exception raised when a stored formula references itself, directly or
    through other stored formulas.
    """

    def __init__(self, name: str, chain: Optional[Sequence[str]] = None):
        """
        Initialize the exception.

        Args:
            name: The formula name that reappeared
            chain: Names being expanded when the cycle was found, outermost first
        """
        self.name = name
        self.chain = list(chain or [])

        path = " -> ".join(self.chain + [name])
        super().__init__(f"Cyclic reference to formula '{name}' ({path})")


class RepositoryError(SatisfierError):
    """Exception raised when the formula repository cannot be read or written."""

    def __init__(self, message: str = "Formula repository error", path: Optional[str] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            path: Backing file of the repository, if any
        """
        self.path = path

        if path is not None:
            message = f"{message}: {path}"

        super().__init__(message)


class ConfigurationError(SatisfierError):
    """Exception raised for unknown strategies, policies or backend types."""

    def __init__(self, message: str = "Invalid configuration", key: Optional[str] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            key: Dotted configuration key involved
        """
        self.key = key

        if key is not None:
            message = f"{message} ({key})"

        super().__init__(message)


class UnknownVariableWarning(UserWarning):
    """
    Warning issued when a pre-assignment names a variable that does not occur
    in the resolved formula. The pre-assignment is skipped.
    """
