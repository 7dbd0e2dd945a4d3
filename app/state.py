"""
State Management for the KNN Application

This module handles configuration management and metrics tracking for the
classifier's command-line driver. It provides functions to load/save
configuration and persist evaluation metrics.
"""

import copy
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Sequence, Union

from app.utils import ensure_parent_directory


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = str(Path(__file__).parent / "config.json")
DEFAULT_METRICS_PATH = "./app/local/metrics.json"

DEFAULT_CONFIG = {
    "dataset_path": "./data/dataset.csv",
    "k": 3,
    "train_ratio": 0.7,
    "random_seed": None,
    "log_level": "INFO",
    "label_names": {}
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """
    Load configuration from a JSON file, filling in defaults.

    Args:
        config_path (str): Path to the configuration file

    Returns:
        dict: Configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        json.JSONDecodeError: If config file is not valid JSON
        ValueError: If a configuration field is invalid
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        loaded = json.load(f)

    if not isinstance(loaded, dict):
        raise ValueError("Configuration file must contain a JSON object")

    config = copy.deepcopy(DEFAULT_CONFIG)
    config.update(loaded)

    _validate_config(config)

    return config


def load_config_or_default(config_path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """Load configuration, falling back to DEFAULT_CONFIG when the file is missing."""
    if not os.path.exists(config_path):
        logger.info(f"No configuration at {config_path}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)
    return load_config(config_path)


def save_config(config: Dict, config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """
    Save configuration to a JSON file.

    Args:
        config (dict): Configuration dictionary to save
        config_path (str): Path to the configuration file

    Raises:
        IOError: If the file cannot be written
        ValueError: If a configuration field is invalid
    """
    _validate_config(config)

    ensure_parent_directory(config_path)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def save_metrics(
    metrics: Dict[str, Any],
    metrics_path: str = DEFAULT_METRICS_PATH
) -> None:
    """
    Save evaluation metrics to a JSON file.

    Args:
        metrics (dict): Dictionary containing evaluation metrics
        metrics_path (str): Path to the metrics file

    Raises:
        IOError: If the file cannot be written
    """
    ensure_parent_directory(metrics_path)

    if 'timestamp' not in metrics:
        metrics['timestamp'] = datetime.now().isoformat()

    with open(metrics_path, 'w', encoding='utf-8') as f:
        json.dump(metrics, f, indent=2)


def _validate_config(config: Dict) -> None:
    """
    Validate configuration fields.

    Args:
        config (dict): Configuration dictionary to validate

    Raises:
        ValueError: If required fields are missing or invalid
    """
    if 'dataset_path' not in config:
        raise ValueError("Required configuration field missing: dataset_path")

    if not isinstance(config['dataset_path'], str) or not config['dataset_path'].strip():
        raise ValueError("Configuration field 'dataset_path' must be a non-empty string")

    k = config.get('k', DEFAULT_CONFIG['k'])
    if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
        raise ValueError("Configuration field 'k' must be a positive integer")

    train_ratio = config.get('train_ratio', DEFAULT_CONFIG['train_ratio'])
    if isinstance(train_ratio, bool) or not isinstance(train_ratio, (int, float)):
        raise ValueError("Configuration field 'train_ratio' must be a number")
    if not 0 < train_ratio <= 1:
        raise ValueError("Configuration field 'train_ratio' must be in (0, 1]")

    seed = config.get('random_seed')
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ValueError("Configuration field 'random_seed' must be an integer or null")

    log_level = config.get('log_level', DEFAULT_CONFIG['log_level'])
    if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
        raise ValueError(f"Configuration field 'log_level' must be one of {LOG_LEVELS}")

    if not isinstance(config.get('label_names', {}), dict):
        raise ValueError("Configuration field 'label_names' must be a dictionary")


def _key_parts(key: Union[str, Sequence[str]]) -> list:
    # label names may contain dots, so callers can pass the parts directly
    if isinstance(key, str):
        return key.split('.')
    return [str(part) for part in key]


def get_config_value(config: Dict, key: Union[str, Sequence[str]], default: Any = None) -> Any:
    """
    Look up a nested configuration value.

    Args:
        config (dict): Configuration dictionary
        key: Dotted key ('label_names.S1') or its parts (('label_names', 'S1'))
        default: Value returned when any part of the key is missing

    Example:
        get_config_value(config, ('label_names', 0), '0')
    """
    value = config

    for part in _key_parts(key):
        if not isinstance(value, dict) or part not in value:
            return default
        value = value[part]

    return value


def update_config_value(config: Dict, key: Union[str, Sequence[str]], value: Any) -> Dict:
    """
    Set a nested configuration value in place, creating missing sections.

    Raises:
        ValueError: If an intermediate key holds a non-dictionary value

    Example:
        update_config_value(config, 'k', 5)
    """
    parts = _key_parts(key)
    section = config

    for part in parts[:-1]:
        section = section.setdefault(part, {})
        if not isinstance(section, dict):
            raise ValueError(f"Configuration field '{part}' is not a section")

    section[parts[-1]] = value
    return config
