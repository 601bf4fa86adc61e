"""
Game of Life Rules on Cell Ages

Survival and birth neighbour counts for the two-dimensional board, applied
to age-encoded cells: a cell that is alive next generation gets age 0, any
other cell ages by one.
"""

import numpy as np
from typing import FrozenSet, Iterable, Optional

from .cells import AGE_DTYPE, ALIVE
from .errors import InvalidArgument


# Standard Conway rules
SURVIVAL_SET: FrozenSet[int] = frozenset({2, 3})  # Live cells survive with 2-3 neighbors
BIRTH_SET: FrozenSet[int] = frozenset({3})        # Dead cells born with exactly 3 neighbors

MAX_NEIGHBORS = 8


def _neighbor_set(counts: Iterable[int], name: str) -> FrozenSet[int]:
    result = frozenset(int(c) for c in counts)
    if any(c < 0 or c > MAX_NEIGHBORS for c in result):
        raise InvalidArgument(f"{name} counts must lie in 0-{MAX_NEIGHBORS}, got {sorted(result)}")
    return result


def next_age(age: int, live_neighbors: int) -> int:
    """Apply standard Conway rules to one age-encoded cell.

    Args:
        age: Current cell age (0 = alive)
        live_neighbors: Number of live neighbours (0-8)

    Returns:
        0 if the cell is alive next generation, otherwise age + 1
    """
    return LifeRuleParams.standard().next_age(age, live_neighbors)


class LifeRuleParams:
    """Neighbour counts under which cells survive or are born.

    Defaults to standard Conway rules, where a cell with exactly two live
    neighbours keeps its state and a cell with exactly three is alive.
    """

    def __init__(self,
                 survival_set: Optional[Iterable[int]] = None,
                 birth_set: Optional[Iterable[int]] = None):
        """Initialize rule parameters.

        Args:
            survival_set: Neighbor counts for live cell survival (default {2,3})
            birth_set: Neighbor counts for dead cell birth (default {3})

        Raises:
            InvalidArgument: If a count lies outside 0-8
        """
        self.survival_set = _neighbor_set(SURVIVAL_SET if survival_set is None else survival_set, "Survival")
        self.birth_set = _neighbor_set(BIRTH_SET if birth_set is None else birth_set, "Birth")

        # Boolean lookups indexed by neighbour count, used by the vectorized update
        self._survives = np.array([n in self.survival_set for n in range(MAX_NEIGHBORS + 1)], dtype=bool)
        self._born = np.array([n in self.birth_set for n in range(MAX_NEIGHBORS + 1)], dtype=bool)

    @classmethod
    def standard(cls) -> 'LifeRuleParams':
        """Create standard Conway rules."""
        return cls(SURVIVAL_SET, BIRTH_SET)

    def is_standard(self) -> bool:
        return self.survival_set == SURVIVAL_SET and self.birth_set == BIRTH_SET

    def next_age(self, age: int, live_neighbors: int) -> int:
        """Apply these rule parameters to a single cell."""
        if age == ALIVE:
            alive_next = live_neighbors in self.survival_set
        else:
            alive_next = live_neighbors in self.birth_set
        return ALIVE if alive_next else age + 1

    def next_ages(self, ages: np.ndarray, live_neighbors: np.ndarray) -> np.ndarray:
        """Vectorized form of next_age over arrays of equal shape."""
        alive_now = ages == ALIVE
        alive_next = np.where(alive_now, self._survives[live_neighbors], self._born[live_neighbors])
        return np.where(alive_next, ALIVE, ages + 1).astype(AGE_DTYPE, copy=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LifeRuleParams):
            return NotImplemented
        return self.survival_set == other.survival_set and self.birth_set == other.birth_set

    def __repr__(self) -> str:
        return f"LifeRuleParams(survival={sorted(self.survival_set)}, birth={sorted(self.birth_set)})"
