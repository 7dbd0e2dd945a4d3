"""
K-Nearest-Neighbors Classifier

This module classifies feature vectors (e.g. SDR sequences) against a labeled
training set. Every query is compared with every training vector by Euclidean
distance; the majority label among the k closest training vectors wins.

Tie-breaks:
- neighbors at equal distance are ordered by ascending training index
- equal vote counts go to the lowest label in sorted label order
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np

from knn.errors import DimensionMismatchError, InvalidArgumentError
from knn.neighbors import rank_neighbors
from knn.scoring import calculate_accuracy
from knn.splitter import split_data
from knn.voting import label_universe_of, vote


logger = logging.getLogger(__name__)


def _as_label_list(labels) -> list:
    # numpy scalars become plain Python values
    if isinstance(labels, np.ndarray):
        return labels.tolist()
    return list(labels)


class BaseClassifier(ABC):
    """
    Common interface of the sequence classifiers.

    A classifier predicts one label per query, splits a dataset into
    training and testing subsets, and scores predictions.
    """

    @abstractmethod
    def classify(self, queries, training_features, training_labels, k: Optional[int] = None) -> List[Any]:
        """Predict one label per query vector."""

    @abstractmethod
    def split_data(self, dataset, train_ratio: float) -> Tuple:
        """Split a dataset into (training, testing)."""

    @abstractmethod
    def calculate_accuracy(self, predicted: Sequence, actual: Sequence) -> float:
        """Percentage of correctly predicted labels."""


class KNNClassifier(BaseClassifier):
    """
    Brute-force k-nearest-neighbors classifier.

    Attributes:
        k -- Default number of neighbors consulted per query.
        random_state -- Seed or numpy Generator used by split_data.
    """

    def __init__(self, k: int = 3, random_state: Optional[Union[int, np.random.Generator]] = None):
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
            raise InvalidArgumentError(f"k must be a positive integer, got {k!r}")
        self.k = int(k)
        self.random_state = random_state

    def classify(self, queries, training_features, training_labels, k: Optional[int] = None) -> List[Any]:
        """
        Classify each query by majority vote of its k nearest training vectors.

        All arguments are validated before any distance is computed. A query
        whose length differs from the training vectors aborts the whole batch.

        Args:
            queries: Sequence of feature vectors to classify
            training_features: Sequence of training feature vectors
            training_labels: Class label of every training vector
            k: Number of neighbors (default: self.k)

        Returns:
            List with one predicted label per query, in query order

        Raises:
            InvalidArgumentError: If an input is missing, the training set is
                empty, features and labels differ in length, or k is not in
                [1, len(training_features)], or a vector holds NaN or infinity
            DimensionMismatchError: If a query and a training vector differ in length
        """
        if queries is None:
            raise InvalidArgumentError("queries must not be None")
        if training_features is None or training_labels is None:
            raise InvalidArgumentError("Training features and labels must not be None")
        if len(training_features) == 0:
            raise InvalidArgumentError("Training set must not be empty")
        if len(training_features) != len(training_labels):
            raise InvalidArgumentError(
                f"Training features and labels differ in length: "
                f"{len(training_features)} != {len(training_labels)}"
            )

        k = self._check_k(self.k if k is None else k, len(training_features))

        labels = _as_label_list(training_labels)
        universe = label_universe_of(labels)

        predicted_labels = []
        for position, query in enumerate(queries):
            try:
                neighbors = rank_neighbors(query, training_features)
            except DimensionMismatchError as e:
                raise DimensionMismatchError(
                    e.expected, e.actual, f"Query {position}: {e}"
                ) from e
            except InvalidArgumentError as e:
                raise InvalidArgumentError(f"Query {position}: {e}") from e

            nearest = neighbors[:k]
            prediction = vote(nearest, labels, universe)

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Query {position}: {k} nearest neighbors (index / distance / class)")
                for neighbor in nearest:
                    logger.debug(f"  {neighbor.index:>6}  {neighbor.distance:.6f}  {labels[neighbor.index]}")
                logger.debug(f"Query {position}: predicted class {prediction}")

            predicted_labels.append(prediction)

        return predicted_labels

    def classify_one(self, query, training_features, training_labels, k: Optional[int] = None) -> Any:
        """Classify a single feature vector."""
        return self.classify([query], training_features, training_labels, k)[0]

    def split_data(self, dataset, train_ratio: float = 0.7) -> Tuple:
        """Split a dataset with this classifier's random_state."""
        return split_data(dataset, train_ratio, self.random_state)

    def calculate_accuracy(self, predicted: Sequence, actual: Sequence) -> float:
        return calculate_accuracy(predicted, actual)

    @staticmethod
    def _check_k(k, n_training: int) -> int:
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
            raise InvalidArgumentError(f"k must be an integer, got {k!r}")
        if not 1 <= k <= n_training:
            raise InvalidArgumentError(
                f"k must be between 1 and the training set size ({n_training}), got {k}"
            )
        return int(k)
