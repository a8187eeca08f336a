"""
Oracle Factory Module - Registry and factory for oracle instantiation.
"""

from typing import Any, Dict, List, Type

from .base import MoveOracle


# Global registry of oracles
_ORACLES: Dict[str, Type[MoveOracle]] = {}

AUTO = "auto"


def register_oracle(cls: Type[MoveOracle]) -> Type[MoveOracle]:
    """
    Decorator to register an oracle class.

    Usage:
        @register_oracle
        class MyOracle(MoveOracle):
            name = "my_oracle"
            ...

    Args:
        cls: Oracle class to register

    Returns:
        The same class (for decorator chaining)
    """
    _ORACLES[cls.name] = cls
    return cls


def create_oracle(name: str, **kwargs: Any) -> MoveOracle:
    """
    Create an oracle instance by name.

    Args:
        name: Oracle name (e.g., "dfs", "graph")
        **kwargs: Additional arguments passed to oracle constructor

    Returns:
        Oracle instance

    Raises:
        ValueError: If oracle name not found
    """
    if name not in _ORACLES:
        available = ", ".join(_ORACLES.keys())
        raise ValueError(f"Unknown oracle: {name}. Available: {available}")
    return _ORACLES[name](**kwargs)


def create_oracle_for_size(size: int, threshold: int, name: str = AUTO,
                           **kwargs: Any) -> MoveOracle:
    """
    Pick the oracle tier for a board size.

    Boards at or above ``threshold`` use the compressed number graph,
    smaller boards use direct cell search. An explicit ``name`` other
    than "auto" bypasses the size rule.

    Args:
        size: Board side n
        threshold: Smallest size served by the graph oracle
        name: "auto" or a registered oracle name
        **kwargs: Passed to the oracle constructor

    Returns:
        Oracle instance
    """
    if name == AUTO:
        name = "graph" if size >= threshold else "dfs"
    return create_oracle(name, **kwargs)


def get_oracle_names() -> List[str]:
    """
    Get list of available oracle names.

    Returns:
        List of registered oracle names
    """
    return list(_ORACLES.keys())


def get_oracle_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered oracles.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _ORACLES.values()
    ]
