"""
Formula repositories.

This module provides the repository contract and its memory and JSON-file
backends.
"""

from satisfier.storage.base import FormulaRecord, FormulaRepository
from satisfier.storage.factory import create_repository
from satisfier.storage.file import JsonFormulaRepository
from satisfier.storage.memory import MemoryFormulaRepository

__all__ = [
    "FormulaRecord",
    "FormulaRepository",
    "JsonFormulaRepository",
    "MemoryFormulaRepository",
    "create_repository",
]
