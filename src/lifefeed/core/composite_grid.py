"""Composite grid: a 1D automaton feeding a Game of Life board from below.

The grid owns two buffers: the visible board and a FIFO window of the most
recently generated input rows (oldest first, newest last). Each tick the
oldest row leaves the window and drives the board's bottom edge, while a
new row generated from the newest one joins the tail.

Published state is immutable. A tick builds new arrays and then swaps a
single reference, so readers always see a completed generation and never
a half-updated board.
"""

import threading
from dataclasses import dataclass
from typing import Optional, Union
import logging

import numpy as np

from .cells import AGE_DTYPE, ALIVE, read_only
from .config import GridConfig
from .errors import InvalidArgument
from .life_engine import LifeEngine
from .row_engine import RowEngine
from .rule_table import RuleTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GridSnapshot:
    """Read-only view of one completed generation."""
    board: np.ndarray    # (rows, columns) ages, read-only
    window: np.ndarray   # (window_depth, columns) ages, oldest row first, read-only
    generation: int      # Ticks since the last reset
    rule: int            # Rule number generating the window

    @property
    def rows(self) -> int:
        return self.board.shape[0]

    @property
    def columns(self) -> int:
        return self.board.shape[1]

    @property
    def newest_row(self) -> np.ndarray:
        return self.window[-1]

    @property
    def oldest_row(self) -> np.ndarray:
        return self.window[0]

    def live_count(self) -> int:
        """Number of alive cells on the board."""
        return int(np.count_nonzero(self.board == ALIVE))


class CompositeGrid:
    """Owns the board and input window and advances them together.

    Attributes:
        config: Dimensions and initial age used on every reset
    """

    def __init__(self, config: Optional[GridConfig] = None,
                 rule_table: Optional[RuleTable] = None,
                 life_engine: Optional[LifeEngine] = None):
        """Create a grid in its reset state.

        Args:
            config: Grid configuration (reference sizing if None)
            rule_table: Rule for the input rows (config.rule if None)
            life_engine: Board engine (standard Conway rules if None)
        """
        self.config = config or GridConfig()
        self._life_engine = life_engine or LifeEngine()
        self._row_engine = RowEngine(rule_table or RuleTable(self.config.rule))
        self._lock = threading.Lock()
        self._state = self._initial_state()

        logger.debug(f"Created composite grid {self.config} with rule {self.rule_table.rule}")

    def _initial_state(self) -> GridSnapshot:
        rows, columns = self.config.rows, self.config.columns
        age = self.config.initial_age

        board = np.full((rows, columns), age, dtype=AGE_DTYPE)
        window = np.full((self.config.window_depth, columns), age, dtype=AGE_DTYPE)
        window[-1, columns // 2] = ALIVE  # single living seed at the centre of the newest row

        return GridSnapshot(read_only(board), read_only(window), 0, self._row_engine.rule_table.rule)

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def columns(self) -> int:
        return self.config.columns

    @property
    def window_depth(self) -> int:
        return self.config.window_depth

    @property
    def rule_table(self) -> RuleTable:
        return self._row_engine.rule_table

    @property
    def generation(self) -> int:
        return self._state.generation

    def snapshot(self) -> GridSnapshot:
        """Latest completed generation (board, window, generation, rule)."""
        return self._state

    def board(self) -> np.ndarray:
        """Read-only board of the latest generation."""
        return self._state.board

    def window(self) -> np.ndarray:
        """Read-only input window of the latest generation, oldest row first."""
        return self._state.window

    def live_count(self) -> int:
        return self._state.live_count()

    def tick(self) -> GridSnapshot:
        """Advance the whole composite state by one generation.

        The oldest window row is evicted and fed to the board as the row
        below it; a freshly generated row is appended to the window tail.

        Returns:
            The newly published snapshot
        """
        with self._lock:
            state = self._state
            feed = state.oldest_row

            new_row = self._row_engine.next_row(state.newest_row)
            window = np.vstack([state.window[1:], new_row[np.newaxis, :]])
            board = self._life_engine.advance(state.board, feed)

            self._state = GridSnapshot(read_only(board), read_only(window),
                                       state.generation + 1, state.rule)
            return self._state

    def step(self, steps: int) -> int:
        """Tick several times.

        Args:
            steps: Number of ticks (>= 0)

        Returns:
            Number of alive board cells after the last tick
        """
        if steps < 0:
            raise InvalidArgument(f"Step count must be non-negative, got {steps}")
        for _ in range(steps):
            self.tick()
        return self.live_count()

    def reset(self) -> GridSnapshot:
        """Replace board and window with the initial single-seed state."""
        with self._lock:
            self._state = self._initial_state()
            logger.debug(f"Reset composite grid (rule {self._state.rule})")
            return self._state

    def set_rule(self, rule: Union[RuleTable, int]) -> GridSnapshot:
        """Switch the input automaton to another rule and reset.

        Args:
            rule: RuleTable or rule number (0-255)

        Raises:
            InvalidArgument: If the rule number is invalid; state is unchanged
        """
        rule_table = rule if isinstance(rule, RuleTable) else RuleTable(rule)

        with self._lock:
            self._row_engine = RowEngine(rule_table)
            self._state = self._initial_state()

        logger.debug(f"Rule changed to {rule_table.rule}; grid reset")
        return self._state

    def __repr__(self) -> str:
        return (f"CompositeGrid({self.rows}x{self.columns}, window={self.window_depth}, "
                f"rule={self.rule_table.rule}, generation={self.generation}, alive={self.live_count()})")
