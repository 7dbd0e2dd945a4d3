"""
Accuracy scoring for predicted labels.
"""

from typing import Optional, Sequence

import numpy as np
from sklearn.metrics import confusion_matrix as sklearn_confusion_matrix

from knn.errors import InvalidArgumentError


def _check_label_pair(predicted: Sequence, actual: Sequence) -> None:
    if predicted is None or actual is None:
        raise InvalidArgumentError("Predicted and actual labels must not be None")

    if len(predicted) != len(actual):
        raise InvalidArgumentError(
            f"Predicted and actual labels differ in length: {len(predicted)} != {len(actual)}"
        )

    if len(predicted) == 0:
        raise InvalidArgumentError("Cannot score an empty set of predictions")


def calculate_accuracy(predicted: Sequence, actual: Sequence) -> float:
    """
    Percentage of positions where the predicted label equals the actual one.

    Args:
        predicted: Predicted labels
        actual: Ground-truth labels, same length as predicted

    Returns:
        Accuracy in percent, between 0 and 100

    Raises:
        InvalidArgumentError: If either input is empty or the lengths differ
    """
    _check_label_pair(predicted, actual)

    correct = sum(1 for p, a in zip(predicted, actual) if p == a)

    return correct / len(predicted) * 100


def confusion_matrix(
    actual: Sequence,
    predicted: Sequence,
    labels: Optional[Sequence] = None
) -> np.ndarray:
    """
    Confusion matrix with actual labels as rows and predictions as columns.

    Args:
        actual: Ground-truth labels
        predicted: Predicted labels, same length as actual
        labels: Label order for rows/columns (default: sorted union of both)

    Returns:
        Integer array of shape (n_labels, n_labels)

    Raises:
        InvalidArgumentError: If either input is empty or the lengths differ
    """
    _check_label_pair(predicted, actual)

    return sklearn_confusion_matrix(list(actual), list(predicted), labels=labels)
