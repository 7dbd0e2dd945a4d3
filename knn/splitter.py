"""
Train/test splitting of a labeled dataset.
"""

from typing import Optional, Tuple, Union

import numpy as np

from knn.errors import InvalidArgumentError


def split_data(
    dataset,
    train_ratio: float = 0.7,
    random_state: Optional[Union[int, np.random.Generator]] = None
) -> Tuple:
    """
    Split a dataset into disjoint training and testing subsets.

    A uniform random permutation of the row indices is drawn; the first
    floor(len(dataset) * train_ratio) permuted rows form the training set
    and the remainder the testing set.

    Args:
        dataset: numpy array of rows or a sequence of labeled examples
        train_ratio: Proportion of rows used for training, in (0, 1]
        random_state: Seed or numpy Generator for reproducibility

    Returns:
        Tuple of (training, testing). Arrays are returned for array input,
        lists otherwise. testing is empty when train_ratio is 1.0.

    Raises:
        InvalidArgumentError: If the dataset is None or empty, or
            train_ratio is outside (0, 1]
    """
    if dataset is None or len(dataset) == 0:
        raise InvalidArgumentError("Cannot split an empty dataset")

    if not 0 < train_ratio <= 1:
        raise InvalidArgumentError(f"train_ratio must be in (0, 1], got {train_ratio}")

    rng = np.random.default_rng(random_state)

    n_rows = len(dataset)
    n_train = int(n_rows * train_ratio)

    indices = rng.permutation(n_rows)
    train_indices = indices[:n_train]
    test_indices = indices[n_train:]

    if isinstance(dataset, np.ndarray):
        return dataset[train_indices], dataset[test_indices]

    return [dataset[i] for i in train_indices], [dataset[i] for i in test_indices]
