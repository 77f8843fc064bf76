# novelty_search/distances.py
import numpy as np
from typing import Sequence

from .exceptions import BehaviorShapeError


def euclidean_distance(behavior0: Sequence[float], behavior1: Sequence[float]) -> float:
    """
    Spatial distance between two behaviors treated as points in behavior space.
    Both behaviors must have the same dimensionality.
    """
    a = np.asarray(behavior0, dtype=float)
    b = np.asarray(behavior1, dtype=float)
    if a.ndim != 1 or b.ndim != 1:
        raise BehaviorShapeError("behaviors must be one-dimensional vectors")
    if a.shape != b.shape:
        raise BehaviorShapeError(
            f"behaviors have differing dimensionality: {a.shape[0]} != {b.shape[0]}"
        )
    return float(np.sqrt(np.sum((a - b) ** 2)))
