"""
Repository factory for creating formula repositories.
"""

from satisfier.storage.base import FormulaRepository
from satisfier.storage.file import JsonFormulaRepository
from satisfier.storage.memory import MemoryFormulaRepository
from satisfier.utils.exceptions import ConfigurationError


def create_repository(
    repository_type: str, data_path: str | None = None, **kwargs
) -> FormulaRepository:
    """
    Create a formula repository of the specified type.

    Args:
        repository_type: Type of repository ('memory' or 'json')
        data_path: Path of the backing file (required for 'json')
        **kwargs: Additional arguments for specific backends

    Returns:
        A repository instance

    Raises:
        ConfigurationError: If the type is unknown or a path is missing
    """
    if repository_type == "memory":
        return MemoryFormulaRepository(**kwargs)

    elif repository_type == "json":
        if data_path is None:
            raise ConfigurationError(
                "data_path must be specified for 'json' repository", "repository.path"
            )
        return JsonFormulaRepository(data_path=data_path, **kwargs)

    else:
        raise ConfigurationError(
            f"Unknown repository type: {repository_type}", "repository.type"
        )
