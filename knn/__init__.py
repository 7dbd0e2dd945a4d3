"""
Brute-force k-nearest-neighbors classification of numeric sequences
"""

from .classifier import BaseClassifier, KNNClassifier
from .distance import euclidean_distance
from .errors import DimensionMismatchError, InvalidArgumentError, KNNError, ParseError
from .neighbors import RankedNeighbor, rank_neighbors
from .scoring import calculate_accuracy, confusion_matrix
from .splitter import split_data
from .voting import vote

__all__ = [
    'BaseClassifier', 'KNNClassifier',
    'euclidean_distance', 'rank_neighbors', 'RankedNeighbor', 'vote',
    'split_data', 'calculate_accuracy', 'confusion_matrix',
    'KNNError', 'InvalidArgumentError', 'DimensionMismatchError', 'ParseError',
]
