"""
Strategies Package - Concrete move-existence oracles.

Import this module to register all built-in oracles.
"""

from .direct_search import DirectSearchOracle
from .number_graph import NumberGraph, NumberGraphOracle, NumberNode

__all__ = [
    "DirectSearchOracle",
    "NumberGraph",
    "NumberGraphOracle",
    "NumberNode",
]
