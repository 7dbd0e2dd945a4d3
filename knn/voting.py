"""
Majority vote among the nearest neighbors.
"""

from collections import Counter
from typing import Any, Optional, Sequence

from knn.errors import InvalidArgumentError
from knn.neighbors import RankedNeighbor


def label_universe_of(training_labels: Sequence) -> list:
    """
    Distinct training labels in ascending order.

    Args:
        training_labels: Class label of every training vector

    Returns:
        Sorted list of distinct labels
    """
    return sorted(set(training_labels))


def vote(
    top_k: Sequence[RankedNeighbor],
    training_labels: Sequence,
    label_universe: Optional[Sequence] = None
) -> Any:
    """
    Determine the class label by majority vote among the nearest neighbors.

    Ties go to the first label, in label-universe order, that reaches the
    maximum count. With the default universe (sorted distinct training
    labels) the lowest class index wins.

    Args:
        top_k: The k nearest neighbors, as returned by rank_neighbors
        training_labels: Class label of every training vector
        label_universe: Ordered set of candidate labels (default: sorted
            distinct training labels)

    Returns:
        The winning label, always one of training_labels

    Raises:
        InvalidArgumentError: If top_k is empty, a neighbor index is out of
            range, or a neighbor label is not in the label universe
    """
    if not top_k:
        raise InvalidArgumentError("At least one neighbor is required to vote")
    if training_labels is None:
        raise InvalidArgumentError("training_labels must not be None")

    if label_universe is None:
        label_universe = label_universe_of(training_labels)

    votes = Counter()
    for neighbor in top_k:
        if not 0 <= neighbor.index < len(training_labels):
            raise InvalidArgumentError(
                f"Neighbor index {neighbor.index} is out of range for {len(training_labels)} training labels"
            )
        votes[training_labels[neighbor.index]] += 1

    unknown = set(votes) - set(label_universe)
    if unknown:
        raise InvalidArgumentError(f"Neighbor labels {sorted(unknown)} are not in the label universe")

    max_votes = max(votes.values())
    for label in label_universe:
        if votes[label] == max_votes:
            return label
