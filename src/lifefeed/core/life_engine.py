"""Game of Life engine for the visible board.

The board has three kinds of edge:
- left and right columns wrap around to each other;
- the top row has nothing above it and always ages, modelling an endless
  dead region beyond the visible top;
- the bottom row reads its lower neighbours from an externally supplied
  input row, which wraps around the same way as the board columns.

Neighbour counts are taken from the old board only, so every cell updates
simultaneously. The arguments are never mutated; a fresh board is returned.
"""

import numpy as np
from typing import Optional, Tuple
import logging

from .cells import ArrayLike, AGE_DTYPE, ALIVE, as_ages
from .errors import InvalidArgument
from .life_rules import LifeRuleParams

logger = logging.getLogger(__name__)

MIN_BOARD_ROWS = 2
MIN_BOARD_COLUMNS = 3


class LifeEngine:
    """Advances an age-encoded board one generation at a time.

    Implements the classic cellular automaton rules on ages:
    - Live cell (age 0) survives with 2-3 neighbors
    - Dead cell becomes alive with exactly 3 neighbors
    - All other cells age by one
    """

    def __init__(self, params: Optional[LifeRuleParams] = None):
        """Initialize the engine.

        Args:
            params: Survival/birth parameters (standard Conway rules if None)
        """
        self.params = params or LifeRuleParams.standard()
        logger.debug(f"Created life engine with {self.params}")

    def _validated(self, board: ArrayLike, input_row: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
        ages = as_ages(board, ndim=2, name="board")
        feed = as_ages(input_row, ndim=1, name="input row")

        rows, columns = ages.shape
        if rows < MIN_BOARD_ROWS or columns < MIN_BOARD_COLUMNS:
            raise InvalidArgument(
                f"Board must be at least {MIN_BOARD_ROWS}x{MIN_BOARD_COLUMNS}, got {rows}x{columns}")
        if feed.shape[0] != columns:
            raise InvalidArgument(f"Input row length {feed.shape[0]} doesn't match board width {columns}")

        return ages, feed

    def count_live_neighbors(self, board: ArrayLike, input_row: ArrayLike) -> np.ndarray:
        """Count live Moore neighbours of every board cell.

        Args:
            board: (rows, columns) array of ages
            input_row: Row treated as lying directly below the board

        Returns:
            int array shaped like the board. Top row entries are 0 because
            that row never consults its neighbours.

        Raises:
            InvalidArgument: On malformed input or a width mismatch
        """
        ages, feed = self._validated(board, input_row)
        return self._count(ages, feed)

    @staticmethod
    def _count(ages: np.ndarray, feed: np.ndarray) -> np.ndarray:
        # Stack the input row under the board so the bottom row sees it as its lower neighbour
        alive = np.vstack([ages == ALIVE, (feed == ALIVE)[np.newaxis, :]]).astype(np.int8)

        # Sum of each cell and its left/right neighbours, with column wraparound
        horizontal = alive + np.roll(alive, 1, axis=1) + np.roll(alive, -1, axis=1)

        counts = np.zeros(ages.shape, dtype=np.int8)
        counts[1:] = horizontal[:-2] + horizontal[1:-1] + horizontal[2:] - alive[1:-1]
        return counts

    def advance(self, board: ArrayLike, input_row: ArrayLike) -> np.ndarray:
        """Compute the next generation of the board.

        Args:
            board: (rows, columns) array of ages, rows >= 2, columns >= 3
            input_row: Row below the board, length equal to columns

        Returns:
            New int64 board of the same shape

        Raises:
            InvalidArgument: On malformed input or a width mismatch
        """
        ages, feed = self._validated(board, input_row)
        counts = self._count(ages, feed)

        new_board = np.empty(ages.shape, dtype=AGE_DTYPE)
        new_board[0] = ages[0] + 1
        new_board[1:] = self.params.next_ages(ages[1:], counts[1:])
        return new_board


# Singleton instance for convenience
default_engine = LifeEngine()
