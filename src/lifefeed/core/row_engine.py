"""Row generator for the one-dimensional input automaton.

Each new row is computed from a single snapshot of the previous row, so
the update is simultaneous across the row. Neighbours wrap around: the
left neighbour of index 0 is the last index and the right neighbour of the
last index is index 0.
"""

import numpy as np
import logging

from .cells import ArrayLike, AGE_DTYPE, ALIVE, as_ages
from .errors import InvalidArgument
from .rule_table import RuleTable

logger = logging.getLogger(__name__)

MIN_ROW_LENGTH = 3


class RowEngine:
    """Produces successive rows of an elementary cellular automaton.

    Rows hold cell ages rather than liveness. A cell that the rule keeps or
    makes alive gets age 0; any other cell gets its previous age plus one.
    """

    def __init__(self, rule_table: RuleTable):
        """Initialize the engine with a decoded rule.

        Args:
            rule_table: Rule used for every generated row
        """
        if not isinstance(rule_table, RuleTable):
            raise InvalidArgument(f"Expected RuleTable, got {type(rule_table).__name__}")
        self._rule_table = rule_table
        logger.debug(f"Created row engine for rule {rule_table.rule}")

    @property
    def rule_table(self) -> RuleTable:
        return self._rule_table

    def _validated(self, row: ArrayLike) -> np.ndarray:
        ages = as_ages(row, ndim=1, name="row")
        if ages.shape[0] < MIN_ROW_LENGTH:
            raise InvalidArgument(f"Row length {ages.shape[0]} is shorter than {MIN_ROW_LENGTH}")
        return ages

    def patterns(self, row: ArrayLike) -> np.ndarray:
        """Compute the pattern index of every cell's neighbourhood.

        Args:
            row: Previous row of ages (length >= 3)

        Returns:
            int array of pattern indices in [0, 7], one per cell

        Raises:
            InvalidArgument: If the row is malformed or too short
        """
        return self._patterns(self._validated(row))

    @staticmethod
    def _patterns(ages: np.ndarray) -> np.ndarray:
        dead = (ages != ALIVE).astype(np.int8)
        left = np.roll(dead, 1)
        right = np.roll(dead, -1)
        return (left << 2) | (dead << 1) | right

    def next_row(self, row: ArrayLike) -> np.ndarray:
        """Generate the row that follows the given one.

        Args:
            row: Previous row of ages (length >= 3); not modified

        Returns:
            New int64 row of the same length

        Raises:
            InvalidArgument: If the row is malformed or too short
        """
        ages = self._validated(row)
        alive_next = self._rule_table.outcomes[self._patterns(ages)]
        return np.where(alive_next, ALIVE, ages + 1).astype(AGE_DTYPE, copy=False)

    def generate(self, row: ArrayLike, steps: int) -> np.ndarray:
        """Run the automaton for several generations.

        Args:
            row: Starting row (not included in the output)
            steps: Number of rows to produce

        Returns:
            (steps, len(row)) array, one generated row per line
        """
        if steps < 0:
            raise InvalidArgument(f"Step count must be non-negative, got {steps}")

        current = self._validated(row)
        history = np.empty((steps, current.shape[0]), dtype=AGE_DTYPE)
        for step in range(steps):
            current = self.next_row(current)
            history[step] = current
        return history

    def __repr__(self) -> str:
        return f"RowEngine(rule={self._rule_table.rule})"
