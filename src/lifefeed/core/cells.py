"""Cell age arrays shared by the row and board engines.

A cell value is its age: 0 means alive, N > 0 means dead for N
consecutive generations. Ages are stored as int64 so that no realistic
run can overflow them.
"""

import numpy as np
from typing import Sequence, Union

from .errors import InvalidArgument

AGE_DTYPE = np.int64
ALIVE = 0

ArrayLike = Union[np.ndarray, Sequence[int], Sequence[Sequence[int]]]


def as_ages(values: ArrayLike, ndim: int, name: str = "cells") -> np.ndarray:
    """Convert input to an age array, validating shape and content.

    Does not copy when the input is already an int64 array, so callers
    must treat the result as read-only.

    Args:
        values: Row (ndim=1) or board (ndim=2) of non-negative integers
        ndim: Required number of dimensions
        name: Name used in error messages

    Returns:
        int64 numpy array

    Raises:
        InvalidArgument: On wrong dimensionality, non-integer or negative values
    """
    array = np.asarray(values)

    if array.ndim != ndim:
        raise InvalidArgument(f"{name} must be {ndim}-dimensional, got shape {array.shape}")
    if array.size and not np.issubdtype(array.dtype, np.integer):
        raise InvalidArgument(f"{name} must hold integer ages, got dtype {array.dtype}")
    if array.size and array.min() < 0:
        raise InvalidArgument(f"{name} contains negative ages")

    return array.astype(AGE_DTYPE, copy=False)


def read_only(array: np.ndarray) -> np.ndarray:
    """Return a non-writeable view of an array."""
    view = array.view()
    view.flags.writeable = False
    return view
