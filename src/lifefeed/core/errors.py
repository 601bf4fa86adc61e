"""Domain errors raised by the simulation engine."""


class InvalidArgument(ValueError):
    """Raised when the engine is handed input it refuses to work with.

    Covers out-of-range rule numbers, rows that are too short, and
    row/board dimension mismatches. The engine never clamps such input;
    callers decide whether to fall back to a default.
    """
