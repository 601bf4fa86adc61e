"""
Simulation engine: rule-driven input rows feeding a Game of Life board.
"""

from .errors import InvalidArgument
from .rule_table import RuleTable
from .row_engine import RowEngine
from .life_rules import LifeRuleParams, SURVIVAL_SET, BIRTH_SET, next_age
from .life_engine import LifeEngine
from .config import GridConfig
from .composite_grid import CompositeGrid, GridSnapshot

__all__ = [
    'InvalidArgument',
    'RuleTable',
    'RowEngine',
    'LifeRuleParams',
    'SURVIVAL_SET',
    'BIRTH_SET',
    'next_age',
    'LifeEngine',
    'GridConfig',
    'CompositeGrid',
    'GridSnapshot',
]
