"""
KNN Sequence Classifier - Command Line Interface

Usage:
    python -m app.main evaluate --data data/dataset.csv --k 3 --train-ratio 0.7 --seed 42
    python -m app.main evaluate --data data/dataset.csv --metrics app/local/metrics.json --plot app/local/cm.png
    python -m app.main classify --training data/training.json --queries data/testing.json --k 1
    python -m app.main --save-config my_config.json evaluate --data data/dataset.csv --k 5

Options not given on the command line are read from the configuration file
(--config, default: config.json next to this module) or fall back to the
built-in defaults.
"""

import argparse
import logging
import sys
from typing import List, Optional

from knn.errors import KNNError
from app.dataset_loader import get_dataset_info, load_data_from_file, load_sequences
from app.state import (
    DEFAULT_CONFIG_PATH,
    get_config_value,
    load_config_or_default,
    save_config,
    save_metrics,
    update_config_value
)
from app.train import classify_sequences, run_knn_experiment
from app.utils import setup_logging


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify numeric sequences with k-nearest neighbors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Split a labeled CSV 70/30 and report accuracy
  python -m app.main evaluate --data data/dataset.csv --k 3 --seed 42

  # Classify named sequences against named training sequences
  python -m app.main classify --training data/training.json --queries data/testing.json
        """
    )

    parser.add_argument(
        '--config',
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help=f'Path to the configuration file (default: {DEFAULT_CONFIG_PATH})'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG also logs every nearest neighbor)'
    )

    parser.add_argument(
        '--save-config',
        type=str,
        default=None,
        help='After a successful run, write the effective configuration (file values plus command-line overrides) to this path'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    evaluate = subparsers.add_parser('evaluate', help='Split a labeled dataset and score the classifier')
    evaluate.add_argument('--data', type=str, default=None, help='Delimited dataset, class index in the last column')
    evaluate.add_argument('--delimiter', type=str, default=',', help='Value separator (default: ",")')
    evaluate.add_argument('--k', type=int, default=None, help='Number of neighbors')
    evaluate.add_argument('--train-ratio', type=float, default=None, help='Proportion of rows used for training')
    evaluate.add_argument('--seed', type=int, default=None, help='Random seed for the split')
    evaluate.add_argument('--metrics', type=str, default=None, help='Write metrics JSON to this path')
    evaluate.add_argument('--plot', type=str, default=None, help='Write a confusion matrix PNG to this path')

    classify = subparsers.add_parser('classify', help='Classify named sequences')
    classify.add_argument('--training', type=str, required=True, help='JSON list of labeled training sequences')
    classify.add_argument('--queries', type=str, required=True, help='JSON list of sequences to classify')
    classify.add_argument('--k', type=int, default=None, help='Number of neighbors')

    return parser


def _resolve(value, config, key):
    # command-line values override the file and are kept for --save-config
    if value is not None:
        update_config_value(config, key, value)
    return get_config_value(config, key)


def run_evaluate(args: argparse.Namespace, config: dict) -> dict:
    data_path = _resolve(args.data, config, 'dataset_path')
    k = _resolve(args.k, config, 'k')
    train_ratio = _resolve(args.train_ratio, config, 'train_ratio')
    seed = _resolve(args.seed, config, 'random_seed')

    rows = load_data_from_file(data_path, delimiter=args.delimiter)
    info = get_dataset_info(rows)
    logger.info(
        f"Loaded {info['sample_count']} rows with {info['feature_dim']} features "
        f"and classes {info['classes']} from {data_path}"
    )

    result = run_knn_experiment(rows, k=k, train_ratio=train_ratio, random_state=seed)

    label_names = [
        get_config_value(config, ('label_names', label), str(label)) for label in result['labels']
    ]

    if result['accuracy'] is not None:
        print(f"Accuracy: {result['accuracy']:.2f}% ({result['n_test']} test rows, k={k})")

    metrics = {
        'dataset_path': data_path,
        'k': k,
        'train_ratio': train_ratio,
        'random_seed': seed,
        'n_train': result['n_train'],
        'n_test': result['n_test'],
        'accuracy': result['accuracy'],
        'labels': result['labels'],
        'confusion_matrix': result['confusion_matrix'],
        'inference_time_ms_per_sample': result['inference_time_ms_per_sample']
    }

    if args.metrics:
        save_metrics(metrics, args.metrics)
        logger.info(f"Metrics saved to {args.metrics}")

    if args.plot:
        if result['confusion_matrix'] is None:
            logger.warning("No testing rows, confusion matrix plot skipped")
        else:
            from app.visualization import create_confusion_matrix
            create_confusion_matrix(result['confusion_matrix'], label_names, args.plot)
            logger.info(f"Confusion matrix saved to {args.plot}")

    return metrics


def run_classify(args: argparse.Namespace, config: dict) -> list:
    k = _resolve(args.k, config, 'k')

    training = load_sequences(args.training)
    queries = load_sequences(args.queries)

    results = classify_sequences(training, queries, k=k)

    for name, label in results:
        display = get_config_value(config, ('label_names', label), label)
        print(f"{name}: {label} ({display})" if display != label else f"{name}: {label}")

    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config_or_default(args.config)
    except (ValueError, OSError) as e:
        setup_logging(args.log_level or "INFO")
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(args.log_level or config.get('log_level', 'INFO'))

    try:
        if args.command == 'evaluate':
            run_evaluate(args, config)
        else:
            run_classify(args, config)
    except (KNNError, ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    if args.save_config:
        try:
            save_config(config, args.save_config)
        except (ValueError, OSError) as e:
            logger.error(f"Could not save configuration: {e}")
            return 1
        logger.info(f"Configuration saved to {args.save_config}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
