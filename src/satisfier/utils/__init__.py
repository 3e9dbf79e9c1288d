"""
Utility modules: exceptions, logging and verification.
"""

from satisfier.utils.exceptions import (
    ConfigurationError,
    CyclicReferenceError,
    ParseError,
    RepositoryError,
    SatisfierError,
    UnknownVariableWarning,
)
from satisfier.utils.logging_utils import SearchTraceLogger, configure_logging
from satisfier.utils.verifier import check_assignment, unsatisfied_clauses
