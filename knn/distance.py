"""
Distance metric used to compare feature vectors.
"""

import numpy as np

from knn.errors import DimensionMismatchError, InvalidArgumentError


def as_feature_vector(values, name: str = "vector") -> np.ndarray:
    """
    Convert a sequence of numbers into a 1-D float array.

    Args:
        values: Sequence of real numbers or 1-D array
        name: Name used in error messages

    Returns:
        1-D numpy array of dtype float64 (a copy is not guaranteed)

    Raises:
        InvalidArgumentError: If values is None, not one-dimensional, or holds
            NaN or infinite entries
    """
    if values is None:
        raise InvalidArgumentError(f"{name} must not be None")

    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must be a sequence of numbers: {e}")

    if vector.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one-dimensional, got shape {vector.shape}")

    if not np.isfinite(vector).all():
        position = int(np.flatnonzero(~np.isfinite(vector))[0])
        raise InvalidArgumentError(f"{name} holds a non-finite value at position {position}: {vector[position]}")

    return vector


def euclidean_distance(a, b) -> float:
    """
    Calculate the Euclidean distance between two feature vectors.

    Args:
        a: First feature vector
        b: Second feature vector of the same length

    Returns:
        Non-negative distance sqrt(sum((a[i] - b[i]) ** 2))

    Raises:
        InvalidArgumentError: If either operand is None
        DimensionMismatchError: If the vectors differ in length
    """
    if a is None or b is None:
        raise InvalidArgumentError("Both feature vectors must not be None")

    a = as_feature_vector(a, "a")
    b = as_feature_vector(b, "b")

    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(a.shape[0], b.shape[0])

    return float(np.sqrt(np.sum((a - b) ** 2)))
