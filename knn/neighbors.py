"""
Neighbor ranking for a single query vector.
"""

from typing import List, NamedTuple

import numpy as np

from knn.distance import as_feature_vector, euclidean_distance
from knn.errors import DimensionMismatchError, InvalidArgumentError


class RankedNeighbor(NamedTuple):
    """Index of a training vector and its distance to the query."""
    index: int
    distance: float


def rank_neighbors(query, training_features) -> List[RankedNeighbor]:
    """
    Rank every training vector by its distance to the query.

    Neighbors at exactly the same distance keep ascending training index,
    so the k-boundary is deterministic.

    Args:
        query: Feature vector to classify
        training_features: Sequence of training feature vectors

    Returns:
        List of RankedNeighbor sorted by ascending distance, one entry per
        training vector

    Raises:
        InvalidArgumentError: If the training set is None or empty
        InvalidArgumentError: If the query or a training vector holds NaN or infinity
        DimensionMismatchError: If the query and a training vector differ in length
    """
    if training_features is None or len(training_features) == 0:
        raise InvalidArgumentError("Training set must contain at least one feature vector")

    query = as_feature_vector(query, "query")

    distances = np.empty(len(training_features), dtype=np.float64)
    for i, train_vector in enumerate(training_features):
        try:
            distances[i] = euclidean_distance(query, train_vector)
        except DimensionMismatchError as e:
            raise DimensionMismatchError(
                e.expected, e.actual,
                f"Query has length {e.expected} but training vector {i} has length {e.actual}"
            ) from e
        except InvalidArgumentError as e:
            raise InvalidArgumentError(f"Training vector {i}: {e}") from e

    order = np.argsort(distances, kind="stable")

    return [RankedNeighbor(int(i), float(distances[i])) for i in order]
