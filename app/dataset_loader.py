"""
Sequence Dataset Loader

This module loads the datasets consumed by the KNN classifier. Two shapes
are supported:

- delimited numeric text, one row per line, where the last value of each
  row is the integer class index
- JSON lists of named sequences, {"SequenceName": ..., "SequenceData": [...]},
  where the sequence name is the class label
"""

import json
import math
import os
import numpy as np
from typing import Dict, List, NamedTuple, Tuple

from knn.errors import InvalidArgumentError, ParseError


class LabeledSequence(NamedTuple):
    name: str
    data: Tuple[float, ...]


def load_data_from_file(file_path: str, delimiter: str = ",") -> np.ndarray:
    """
    Load a delimited numeric dataset into a 2-D array.

    Blank lines are skipped. Every other line must hold the same number of
    numeric values.

    Args:
        file_path: Path to the dataset text file
        delimiter: Value separator (default: ",")

    Returns:
        Array of shape (n_rows, n_columns) with dtype float64

    Raises:
        FileNotFoundError: If the dataset file doesn't exist
        ParseError: If a line is not UTF-8, a value is not a finite number,
            rows differ in width, or the file holds no rows
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Dataset file not found at {file_path}")

    with open(file_path, 'rb') as f:
        raw_lines = f.read().splitlines()

    rows = []
    width = None

    for line_number, raw_line in enumerate(raw_lines, start=1):
        try:
            line = raw_line.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(
                f"Line {line_number} is not valid UTF-8 text (byte {e.start + 1})",
                line=line_number,
                position=None
            )

        if not line.strip():
            continue

        values = line.split(delimiter)

        row = []
        for position, token in enumerate(values, start=1):
            try:
                value = float(token)
            except ValueError:
                raise ParseError(
                    f"Failed to parse value {token.strip()!r} at line {line_number}, position {position}",
                    line=line_number,
                    position=position
                )

            if not math.isfinite(value):
                raise ParseError(
                    f"Non-finite value {token.strip()!r} at line {line_number}, position {position}",
                    line=line_number,
                    position=position
                )

            row.append(value)

        if width is None:
            width = len(row)
        elif len(row) != width:
            raise ParseError(
                f"Line {line_number} has {len(row)} values, expected {width}",
                line=line_number
            )

        rows.append(row)

    if not rows:
        raise ParseError(f"Dataset file {file_path} contains no rows")

    return np.array(rows, dtype=np.float64)


def extract_actual_labels(rows: np.ndarray) -> np.ndarray:
    """
    Extract the class index stored in the last column of every row.

    Args:
        rows: Array of shape (n_rows, n_columns)

    Returns:
        Integer label array of shape (n_rows,)

    Raises:
        InvalidArgumentError: If a label is not a finite whole number
    """
    rows = _as_rows(rows)
    labels = rows[:, -1]

    bad = np.flatnonzero(~np.isfinite(labels) | (labels != np.round(labels)))
    if bad.size:
        raise InvalidArgumentError(f"Row {bad[0] + 1} has label {labels[bad[0]]}, expected a whole class index")

    return labels.astype(np.int64)


def separate_features_and_labels(rows: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split labeled rows into feature vectors and class indices.

    Args:
        rows: Array of shape (n_rows, n_features + 1), label in the last column

    Returns:
        Tuple of (features, labels) where:
            - features: array of shape (n_rows, n_features)
            - labels: integer array of shape (n_rows,)
    """
    rows = _as_rows(rows)
    if rows.shape[1] < 2:
        raise InvalidArgumentError("Labeled rows need at least one feature column and a label column")

    return rows[:, :-1], extract_actual_labels(rows)


def load_sequences(file_path: str) -> List[LabeledSequence]:
    """
    Load named sequences from a JSON file.

    The file holds a list of objects such as
    {"SequenceName": "S1", "SequenceData": [8039, 8738, ...]}.

    Args:
        file_path: Path to the JSON file

    Returns:
        List of LabeledSequence in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is not valid JSON or an entry is malformed
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Sequence file not found at {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            entries = json.load(f)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in {file_path}: {e.msg}", line=e.lineno, position=e.colno)
        except UnicodeDecodeError as e:
            raise ParseError(f"{file_path} is not valid UTF-8 text (byte {e.start + 1})")

    if not isinstance(entries, list):
        raise ParseError(f"{file_path} must contain a list of sequences")

    sequences = []
    for entry_number, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict) or 'SequenceName' not in entry or 'SequenceData' not in entry:
            raise ParseError(
                f"Entry {entry_number} must have 'SequenceName' and 'SequenceData'",
                line=entry_number
            )

        data = entry['SequenceData']
        if not isinstance(data, list):
            raise ParseError(f"Entry {entry_number}: 'SequenceData' must be a list", line=entry_number)

        for position, value in enumerate(data, start=1):
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ParseError(
                    f"Failed to parse value {value!r} in entry {entry_number}, position {position}",
                    line=entry_number,
                    position=position
                )

        sequences.append(LabeledSequence(str(entry['SequenceName']), tuple(float(v) for v in data)))

    return sequences


def sequences_to_arrays(sequences: List[LabeledSequence]) -> Tuple[List[Tuple[float, ...]], List[str]]:
    """
    Separate named sequences into feature vectors and labels.

    Sequences may differ in length; the classifier reports a mismatch when
    such vectors are compared.

    Returns:
        Tuple of (features, names)
    """
    features = [sequence.data for sequence in sequences]
    names = [sequence.name for sequence in sequences]
    return features, names


def get_dataset_info(rows: np.ndarray) -> Dict:
    """
    Extract metadata and statistics from a labeled numeric dataset.

    Args:
        rows: Array of shape (n_rows, n_features + 1), label in the last column

    Returns:
        Dictionary containing:
            - sample_count: Number of rows
            - feature_dim: Number of feature columns
            - classes: Sorted list of class indices
            - samples_per_class: Number of rows per class index
    """
    if rows is None or len(rows) == 0:
        return {
            "sample_count": 0,
            "feature_dim": None,
            "classes": [],
            "samples_per_class": {}
        }

    rows = _as_rows(rows)
    labels = extract_actual_labels(rows)
    classes, counts = np.unique(labels, return_counts=True)

    return {
        "sample_count": int(rows.shape[0]),
        "feature_dim": int(rows.shape[1] - 1),
        "classes": classes.tolist(),
        "samples_per_class": {int(c): int(n) for c, n in zip(classes, counts)}
    }


def _as_rows(rows) -> np.ndarray:
    if rows is None:
        raise InvalidArgumentError("rows must not be None")

    rows = np.asarray(rows, dtype=np.float64)
    if rows.ndim != 2 or rows.shape[0] == 0:
        raise InvalidArgumentError(f"Expected a non-empty 2-D array of rows, got shape {rows.shape}")

    return rows
