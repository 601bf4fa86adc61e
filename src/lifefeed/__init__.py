"""
lifefeed: an elementary cellular automaton continuously feeding new rows
into a Conway's Game of Life board, with dead cells aged for colour mapping.
"""

from .core import (
    InvalidArgument,
    RuleTable,
    RowEngine,
    LifeEngine,
    LifeRuleParams,
    GridConfig,
    CompositeGrid,
    GridSnapshot,
)

__version__ = "0.1.0"

__all__ = [
    'InvalidArgument',
    'RuleTable',
    'RowEngine',
    'LifeEngine',
    'LifeRuleParams',
    'GridConfig',
    'CompositeGrid',
    'GridSnapshot',
]
