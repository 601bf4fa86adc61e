"""Elementary (1D, radius-1) cellular automaton rule decoding.

A rule number in [0, 255] carries one output bit per neighbour
configuration. Configurations are indexed by DEAD-ness: bit 2 is the left
neighbour, bit 1 the middle, bit 0 the right, and a set bit means that
neighbour is dead (age > 0). Rule 30 therefore reads differently here than
in the usual alive-indexed convention, which the animation depends on.
"""

import numpy as np
from typing import Union

from .errors import InvalidArgument

MIN_RULE = 0
MAX_RULE = 255
NUM_PATTERNS = 8


class RuleTable:
    """Immutable lookup table of the 8 outcomes encoded by a rule number.

    Attributes:
        rule: The rule number this table was decoded from
        outcomes: Read-only boolean array, outcomes[k] True means a cell
            whose neighbourhood has pattern k is alive next generation
    """

    __slots__ = ("_rule", "_outcomes")

    def __init__(self, rule: int):
        """Decode a rule number.

        Args:
            rule: Integer in [0, 255]

        Raises:
            InvalidArgument: If rule is not an integer or is out of range
        """
        if isinstance(rule, bool) or not isinstance(rule, (int, np.integer)):
            raise InvalidArgument(f"Rule must be an integer, got {type(rule).__name__}")
        if rule < MIN_RULE or rule > MAX_RULE:
            raise InvalidArgument(f"Illegal rule number: {rule} (must be {MIN_RULE}-{MAX_RULE})")

        self._rule = int(rule)
        outcomes = np.array([((self._rule >> k) & 1) == 1 for k in range(NUM_PATTERNS)], dtype=bool)
        outcomes.flags.writeable = False
        self._outcomes = outcomes

    @classmethod
    def parse(cls, text: str) -> 'RuleTable':
        """Build a table from user-entered rule text such as ' 110 '.

        Raises:
            InvalidArgument: If the text is not a decimal integer in range
        """
        cleaned = text.replace(" ", "").strip()
        if not cleaned.isdigit():
            raise InvalidArgument(f"Rule text {text!r} is not a number")
        return cls(int(cleaned))

    @property
    def rule(self) -> int:
        return self._rule

    @property
    def outcomes(self) -> np.ndarray:
        return self._outcomes

    @staticmethod
    def pattern_index(left_dead: Union[bool, int], middle_dead: Union[bool, int],
                      right_dead: Union[bool, int]) -> int:
        """Pattern index for one neighbourhood, each flag True when that cell is dead."""
        return (int(bool(left_dead)) << 2) | (int(bool(middle_dead)) << 1) | int(bool(right_dead))

    def outcome(self, pattern: int) -> bool:
        """Whether a cell with the given pattern index is alive next generation.

        Raises:
            InvalidArgument: If pattern is not in [0, 7]
        """
        if not 0 <= pattern < NUM_PATTERNS:
            raise InvalidArgument(f"Pattern index {pattern} out of range 0-{NUM_PATTERNS - 1}")
        return bool(self._outcomes[pattern])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleTable):
            return NotImplemented
        return self._rule == other._rule

    def __hash__(self) -> int:
        return hash(self._rule)

    def __repr__(self) -> str:
        bits = ''.join('1' if alive else '0' for alive in reversed(self._outcomes))
        return f"RuleTable(rule={self._rule}, bits={bits})"
