"""
Error types raised by the KNN classifier and its dataset loaders.

All errors derive from KNNError. The argument errors also derive from
ValueError so callers that already guard numeric code with ValueError
keep working.
"""

from typing import Optional


class KNNError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(KNNError, ValueError):
    """Missing input, k out of range, empty dataset or mismatched label lengths."""


class DimensionMismatchError(KNNError, ValueError):
    """Two feature vectors of unequal length were compared."""

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        if message is None:
            message = f"Feature vectors must have the same length, got {expected} and {actual}"
        super().__init__(message)


class ParseError(KNNError, ValueError):
    """
    Malformed input encountered while loading a dataset.

    Args:
        message: Human readable description
        line: 1-based line (or entry) number of the offending value
        position: 1-based column of the offending value, if known
    """

    def __init__(self, message: str, line: Optional[int] = None, position: Optional[int] = None):
        self.line = line
        self.position = position
        super().__init__(message)
