"""Configuration for the composite simulation.

Reference sizing matches the animation window: a 172x299 board
above a 50-row input window, driven by rule 30 every 35ms.
"""

import os
from typing import Any, Dict, Mapping, Optional
import logging

from .errors import InvalidArgument
from .rule_table import MIN_RULE, MAX_RULE

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 172
DEFAULT_COLUMNS = 299
DEFAULT_WINDOW_DEPTH = 50
DEFAULT_RULE = 30
DEFAULT_INITIAL_AGE = 100000  # "long dead" marker, only meaningful to colour mapping
DEFAULT_TICK_INTERVAL_MS = 35

ENV_PREFIX = "LIFEFEED_"

# Environment variable suffix -> constructor argument
_ENV_FIELDS = {
    "ROWS": "rows",
    "COLUMNS": "columns",
    "WINDOW_DEPTH": "window_depth",
    "RULE": "rule",
    "INITIAL_AGE": "initial_age",
    "TICK_INTERVAL_MS": "tick_interval_ms",
}


class GridConfig:
    """Dimensions, rule and timing of a composite grid.

    The tick interval belongs to whatever schedules ticks; the grid itself
    only reads the dimensions, rule and initial age.
    """

    def __init__(self,
                 rows: int = DEFAULT_ROWS,
                 columns: int = DEFAULT_COLUMNS,
                 window_depth: int = DEFAULT_WINDOW_DEPTH,
                 rule: int = DEFAULT_RULE,
                 initial_age: int = DEFAULT_INITIAL_AGE,
                 tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS):
        """Initialize and validate the configuration.

        Args:
            rows: Board height (>= 2)
            columns: Board and row width (>= 3)
            window_depth: Number of input rows retained (>= 1)
            rule: Elementary automaton rule number (0-255)
            initial_age: Age given to every dead cell on reset (>= 1)
            tick_interval_ms: Period between ticks for the scheduler (> 0)

        Raises:
            InvalidArgument: If any value is out of range
        """
        if rows < 2:
            raise InvalidArgument(f"Board needs at least 2 rows, got {rows}")
        if columns < 3:
            raise InvalidArgument(f"Board needs at least 3 columns, got {columns}")
        if window_depth < 1:
            raise InvalidArgument(f"Window depth must be positive, got {window_depth}")
        if not MIN_RULE <= rule <= MAX_RULE:
            raise InvalidArgument(f"Illegal rule number: {rule} (must be {MIN_RULE}-{MAX_RULE})")
        if initial_age < 1:
            raise InvalidArgument(f"Initial age must mark cells dead (>= 1), got {initial_age}")
        if tick_interval_ms <= 0:
            raise InvalidArgument(f"Tick interval must be positive, got {tick_interval_ms}ms")

        self.rows = rows
        self.columns = columns
        self.window_depth = window_depth
        self.rule = rule
        self.initial_age = initial_age
        self.tick_interval_ms = tick_interval_ms

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'GridConfig':
        """Build a configuration from LIFEFEED_* environment variables.

        Unset variables keep their defaults.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            InvalidArgument: If a variable is not an integer or out of range
        """
        source = os.environ if environ is None else environ
        kwargs: Dict[str, int] = {}

        for suffix, field_name in _ENV_FIELDS.items():
            raw = source.get(ENV_PREFIX + suffix)
            if raw is None or raw.strip() == "":
                continue
            try:
                kwargs[field_name] = int(raw.strip())
            except ValueError as e:
                raise InvalidArgument(f"{ENV_PREFIX + suffix}={raw!r} is not an integer") from e

        if kwargs:
            logger.debug(f"Configuration overrides from environment: {kwargs}")
        return cls(**kwargs)

    def copy(self) -> 'GridConfig':
        """Create a copy of the configuration."""
        return GridConfig(**self.to_dict())

    def replace(self, **changes: int) -> 'GridConfig':
        """Copy with some fields changed, validated like a new config."""
        values = self.to_dict()
        unknown = set(changes) - set(values)
        if unknown:
            raise InvalidArgument(f"Unknown configuration fields: {sorted(unknown)}")
        values.update(changes)
        return GridConfig(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "columns": self.columns,
            "window_depth": self.window_depth,
            "rule": self.rule,
            "initial_age": self.initial_age,
            "tick_interval_ms": self.tick_interval_ms,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (f"GridConfig({self.rows}x{self.columns}, window={self.window_depth}, "
                f"rule={self.rule}, interval={self.tick_interval_ms}ms)")
