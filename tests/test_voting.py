"""
Unit tests for majority voting.
"""

import pytest

from knn.errors import InvalidArgumentError
from knn.neighbors import RankedNeighbor
from knn.voting import label_universe_of, vote


def neighbors(*indices):
    return [RankedNeighbor(i, float(n)) for n, i in enumerate(indices)]


def test_majority_label_wins():
    labels = ['A', 'B', 'B', 'A', 'B']
    assert vote(neighbors(1, 2, 0), labels) == 'B'


def test_single_neighbor():
    assert vote(neighbors(3), [0, 0, 0, 1]) == 1


def test_tie_goes_to_lowest_class_index():
    labels = [2, 1, 0, 2]
    # one vote each for 2 and 1
    assert vote(neighbors(0, 1), labels) == 1


def test_tie_goes_to_smallest_name():
    labels = ['S3', 'S1', 'S2']
    assert vote(neighbors(0, 2, 1), labels) == 'S1'


def test_tie_follows_explicit_universe_order():
    labels = ['S3', 'S1', 'S2']
    assert vote(neighbors(0, 1), labels, label_universe=['S3', 'S2', 'S1']) == 'S3'


def test_result_is_a_training_label():
    labels = [5, 7, 7, 9, 5, 9]
    for k in range(1, len(labels) + 1):
        assert vote(neighbors(*range(k)), labels) in labels


def test_label_universe_is_sorted_and_distinct():
    assert label_universe_of([2, 0, 2, 1, 0]) == [0, 1, 2]


def test_empty_neighbors_raise():
    with pytest.raises(InvalidArgumentError):
        vote([], ['A'])


def test_neighbor_index_out_of_range_raises():
    with pytest.raises(InvalidArgumentError):
        vote(neighbors(5), ['A', 'B'])


def test_label_outside_universe_raises():
    with pytest.raises(InvalidArgumentError):
        vote(neighbors(0), ['C', 'A'], label_universe=['A', 'B'])
