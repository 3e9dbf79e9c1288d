"""
Registry for search strategies.
Implements a simple registry pattern for registering strategies by name and
creating them from configuration.
"""

import logging
from collections.abc import Callable

from satisfier.solvers.base import SolverBase
from satisfier.utils.exceptions import ConfigurationError

# Set up logging
logger = logging.getLogger(__name__)


class SolverRegistry:
    """
    Registry for search strategies.
    Enables registering solvers by name and retrieving them later.
    """

    _registry: dict[str, type[SolverBase]] = {}
    _default_solver: str | None = None

    @classmethod
    def register(cls, name: str, solver_cls: type[SolverBase]) -> None:
        """
        Register a solver with the given name.

        Args:
            name: Name of the strategy
            solver_cls: Solver class (must inherit from SolverBase)
        """
        if not issubclass(solver_cls, SolverBase):
            raise TypeError(
                f"Solver class {solver_cls.__name__} must inherit from SolverBase"
            )

        if name in cls._registry:
            logger.warning(f"Overriding existing solver registration for '{name}'")

        cls._registry[name] = solver_cls

        # If this is the first solver registered, make it the default
        if cls._default_solver is None:
            cls._default_solver = name

    @classmethod
    def register_as(cls, name: str) -> Callable[[type[SolverBase]], type[SolverBase]]:
        """
        Decorator to register a solver with the given name.

        Args:
            name: Name of the strategy

        Returns:
            Decorator function that registers the solver
        """

        def decorator(solver_cls: type[SolverBase]) -> type[SolverBase]:
            solver_cls.solver_name = name
            cls.register(name, solver_cls)
            return solver_cls

        return decorator

    @classmethod
    def set_default(cls, name: str) -> None:
        if name not in cls._registry:
            raise ConfigurationError(f"No solver registered with name '{name}'", "solver.strategy")
        cls._default_solver = name

    @classmethod
    def get(cls, name: str | None = None) -> type[SolverBase]:
        """
        Get a solver class by name.

        Args:
            name: Name of the strategy, or None to get the default

        Returns:
            Solver class
        """
        if name is None:
            if cls._default_solver is None:
                raise ConfigurationError("No default solver set", "solver.strategy")
            return cls._registry[cls._default_solver]

        if name not in cls._registry:
            raise ConfigurationError(f"No solver registered with name '{name}'", "solver.strategy")

        return cls._registry[name]

    @classmethod
    def list_solvers(cls) -> list[str]:
        return list(cls._registry.keys())

    @classmethod
    def create(cls, name: str | None = None, **kwargs) -> SolverBase:
        """
        Create a new instance of the specified solver.

        Args:
            name: Name of the strategy, or None to use the default
            **kwargs: Arguments to pass to the solver constructor

        Returns:
            Instance of the solver
        """
        solver_cls = cls.get(name)
        return solver_cls(**kwargs)


# Register common decorator for more concise solver registration
register_solver = SolverRegistry.register_as
