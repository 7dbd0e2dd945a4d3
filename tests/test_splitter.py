"""
Unit tests for train/test splitting.
"""

import pytest
import numpy as np

from knn.errors import InvalidArgumentError
from knn.splitter import split_data


@pytest.fixture
def indexed_rows():
    """10 rows whose first column is the row index."""
    return np.column_stack([np.arange(10), np.arange(10) % 3]).astype(np.float64)


def row_ids(rows):
    return [int(row[0]) for row in rows]


def test_split_sizes(indexed_rows):
    train, test = split_data(indexed_rows, train_ratio=0.7, random_state=42)

    assert len(train) == 7
    assert len(test) == 3


def test_split_is_disjoint_and_complete(indexed_rows):
    train, test = split_data(indexed_rows, train_ratio=0.7, random_state=0)

    train_ids = set(row_ids(train))
    test_ids = set(row_ids(test))

    assert train_ids.isdisjoint(test_ids)
    assert train_ids | test_ids == set(range(10))
    assert len(train) + len(test) == len(indexed_rows)


def test_split_reproducibility(indexed_rows):
    train1, test1 = split_data(indexed_rows, train_ratio=0.7, random_state=42)
    train2, test2 = split_data(indexed_rows, train_ratio=0.7, random_state=42)

    np.testing.assert_array_equal(train1, train2)
    np.testing.assert_array_equal(test1, test2)


def test_different_seeds_shuffle_differently(indexed_rows):
    splits = {tuple(row_ids(split_data(indexed_rows, 0.5, random_state=seed)[0])) for seed in range(5)}
    assert len(splits) > 1


def test_split_accepts_generator(indexed_rows):
    train1, _ = split_data(indexed_rows, 0.7, random_state=np.random.default_rng(3))
    train2, _ = split_data(indexed_rows, 0.7, random_state=np.random.default_rng(3))

    np.testing.assert_array_equal(train1, train2)


def test_full_ratio_leaves_testing_empty(indexed_rows):
    train, test = split_data(indexed_rows, train_ratio=1.0, random_state=1)

    assert len(train) == 10
    assert len(test) == 0


def test_floor_of_training_rows():
    train, test = split_data(list(range(7)), train_ratio=0.5, random_state=1)

    assert len(train) == 3
    assert len(test) == 4


def test_split_of_list_returns_lists():
    dataset = [('A', (0.0, 1.0)), ('B', (1.0, 0.0)), ('C', (2.0, 2.0)), ('D', (3.0, 1.0))]
    train, test = split_data(dataset, train_ratio=0.5, random_state=9)

    assert isinstance(train, list)
    assert isinstance(test, list)
    assert sorted(train + test) == sorted(dataset)


def test_split_invalid_ratio(indexed_rows):
    with pytest.raises(InvalidArgumentError):
        split_data(indexed_rows, train_ratio=0.0)

    with pytest.raises(InvalidArgumentError):
        split_data(indexed_rows, train_ratio=1.5)

    with pytest.raises(InvalidArgumentError):
        split_data(indexed_rows, train_ratio=-0.1)


def test_split_empty_dataset():
    with pytest.raises(InvalidArgumentError):
        split_data([], train_ratio=0.7)

    with pytest.raises(InvalidArgumentError):
        split_data(None, train_ratio=0.7)
