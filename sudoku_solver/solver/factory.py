"""
Solver Factory Module - Registry and factory for solver instantiation.
"""

from typing import Any, Dict, List, Type

from .base import SudokuSolver
from .errors import InvalidSolverType


# Global registry of solvers
_SOLVERS: Dict[str, Type[SudokuSolver]] = {}

DEFAULT_SOLVER = "dancing_links"


def register_solver(cls: Type[SudokuSolver]) -> Type[SudokuSolver]:
    """
    Decorator to register a solver class.

    Usage:
        @register_solver
        class MySolver(SudokuSolver):
            name = "my_solver"
            ...

    Args:
        cls: Solver class to register

    Returns:
        The same class (for decorator chaining)
    """
    _SOLVERS[cls.name] = cls
    return cls


def create_solver(kind: str, **kwargs: Any) -> SudokuSolver:
    """
    Create a solver instance by name.

    Args:
        kind: Solver name ("backtracking" or "dancing_links")
        **kwargs: Additional arguments passed to solver constructor

    Returns:
        Solver instance

    Raises:
        InvalidSolverType: If solver name not found
    """
    if kind not in _SOLVERS:
        available = ", ".join(_SOLVERS.keys())
        raise InvalidSolverType(f"Unknown solver: {kind}. Available: {available}")
    return _SOLVERS[kind](**kwargs)


def get_solver_names() -> List[str]:
    """Get list of registered solver names."""
    return list(_SOLVERS.keys())


def get_solver_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered solvers.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _SOLVERS.values()
    ]


def get_default_solver_name() -> str:
    """
    Get the default solver name.

    Returns:
        "dancing_links" if available, else first registered
    """
    if DEFAULT_SOLVER in _SOLVERS:
        return DEFAULT_SOLVER
    if _SOLVERS:
        return next(iter(_SOLVERS.keys()))
    return ""
