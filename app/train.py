"""
KNN Evaluation Module

This module runs the classifier end to end: split a labeled dataset, classify
the testing rows against the training rows and score the predictions. It also
classifies named query sequences against named training sequences.
"""

import numpy as np
from typing import Dict, List, Optional, Tuple
import logging
import time

from knn.classifier import KNNClassifier
from knn.scoring import confusion_matrix
from app.dataset_loader import LabeledSequence, separate_features_and_labels, sequences_to_arrays


logger = logging.getLogger(__name__)


def run_knn_experiment(
    rows: np.ndarray,
    k: int = 3,
    train_ratio: float = 0.7,
    random_state: Optional[int] = None,
    verbose: bool = True
) -> Dict:
    """
    Split labeled rows, classify the testing rows and score the result.

    Args:
        rows: Array of shape (n_rows, n_features + 1), class index in the last column
        k: Number of neighbors
        train_ratio: Proportion of rows used for training, in (0, 1]
        random_state: Seed for the train/test split
        verbose: Whether to log progress

    Returns:
        Dictionary containing:
            - predictions: Predicted class of every testing row
            - actual_labels: True class of every testing row
            - accuracy: Percentage of correct predictions (None without testing rows)
            - confusion_matrix: Nested list, rows are true classes (None without testing rows)
            - labels: Class order of the confusion matrix
            - n_train: Number of training rows
            - n_test: Number of testing rows
            - inference_time_ms_per_sample: Classification time per testing row
    """
    classifier = KNNClassifier(k=k, random_state=random_state)

    train_rows, test_rows = classifier.split_data(np.asarray(rows, dtype=np.float64), train_ratio)

    if verbose:
        logger.info(f"Running KNN (k={k}) on {len(rows)} rows")
        logger.info(f"Train samples: {len(train_rows)}, Test samples: {len(test_rows)}")

    result = {
        'predictions': [],
        'actual_labels': [],
        'accuracy': None,
        'confusion_matrix': None,
        'labels': [],
        'n_train': len(train_rows),
        'n_test': len(test_rows),
        'inference_time_ms_per_sample': None
    }

    if len(test_rows) == 0:
        logger.warning("Testing set is empty, accuracy is not computed")
        return result

    X_train, y_train = separate_features_and_labels(train_rows)
    X_test, y_test = separate_features_and_labels(test_rows)

    start_time = time.time()
    predictions = classifier.classify(X_test, X_train, y_train)
    end_time = time.time()

    actual_labels = y_test.tolist()
    labels = sorted(set(actual_labels) | set(predictions))

    result['predictions'] = predictions
    result['actual_labels'] = actual_labels
    result['accuracy'] = classifier.calculate_accuracy(predictions, actual_labels)
    result['confusion_matrix'] = confusion_matrix(actual_labels, predictions, labels=labels).tolist()
    result['labels'] = labels
    result['inference_time_ms_per_sample'] = (end_time - start_time) / len(X_test) * 1000

    if verbose:
        logger.info(f"Accuracy: {result['accuracy']:.2f}%")
        logger.info(f"Inference Time: {result['inference_time_ms_per_sample']:.3f} ms/sample")

    return result


def classify_sequences(
    training_sequences: List[LabeledSequence],
    query_sequences: List[LabeledSequence],
    k: int = 1
) -> List[Tuple[str, str]]:
    """
    Classify named query sequences against named training sequences.

    The name of each training sequence is its class label.

    Args:
        training_sequences: Labeled training sequences
        query_sequences: Sequences to classify; their names identify them in the result
        k: Number of neighbors

    Returns:
        List of (query name, predicted label) in query order
    """
    training_features, training_labels = sequences_to_arrays(training_sequences)
    query_features, query_names = sequences_to_arrays(query_sequences)

    classifier = KNNClassifier(k=k)
    predictions = classifier.classify(query_features, training_features, training_labels)

    for name, prediction in zip(query_names, predictions):
        logger.info(f"Sequence {name} classified as {prediction}")

    return list(zip(query_names, predictions))
