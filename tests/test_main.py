"""
End-to-end tests for the command-line interface.
"""

import json
import os
import shutil
import tempfile
from unittest.mock import patch

import pytest

from app.main import main
from app.state import load_config


DATA_DIR = os.path.join(os.path.dirname(__file__), '..', 'data')


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    if os.path.exists(temp_dir):
        shutil.rmtree(temp_dir)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep CLI runs from installing stream handlers during tests."""
    with patch('app.main.setup_logging') as mock_setup:
        yield mock_setup


@pytest.fixture
def config_path(temp_dir):
    path = os.path.join(temp_dir, 'config.json')
    with open(path, 'w') as f:
        json.dump({
            "dataset_path": os.path.join(DATA_DIR, 'dataset.csv'),
            "k": 3,
            "train_ratio": 0.7,
            "random_seed": 42,
            "label_names": {"S1": "Even", "0": "Even", "1": "Odd", "2": "Neither Odd nor Even"}
        }, f)
    return path


def test_evaluate_with_config_defaults(config_path, capsys):
    assert main(['--config', config_path, 'evaluate']) == 0

    out = capsys.readouterr().out
    assert "Accuracy: " in out
    assert "(5 test rows, k=3)" in out


def test_evaluate_writes_metrics_and_plot(config_path, temp_dir):
    metrics_path = os.path.join(temp_dir, 'out', 'metrics.json')
    plot_path = os.path.join(temp_dir, 'out', 'cm.png')

    exit_code = main([
        '--config', config_path, 'evaluate',
        '--k', '1', '--train-ratio', '0.6', '--seed', '3',
        '--metrics', metrics_path, '--plot', plot_path
    ])

    assert exit_code == 0
    with open(metrics_path) as f:
        metrics = json.load(f)
    assert metrics['k'] == 1
    assert metrics['n_train'] == 9
    assert metrics['n_test'] == 6
    assert metrics['random_seed'] == 3
    assert 0 <= metrics['accuracy'] <= 100
    assert os.path.getsize(plot_path) > 0


def test_evaluate_reports_parse_error(config_path, temp_dir):
    bad_path = os.path.join(temp_dir, 'bad.csv')
    with open(bad_path, 'w') as f:
        f.write("1,2,0\n1,oops,1\n")

    with patch('app.main.logger') as mock_logger:
        assert main(['--config', config_path, 'evaluate', '--data', bad_path]) == 1

    message = mock_logger.error.call_args[0][0]
    assert "line 2, position 2" in message


def test_evaluate_missing_dataset(config_path, temp_dir):
    missing = os.path.join(temp_dir, 'missing.csv')
    assert main(['--config', config_path, 'evaluate', '--data', missing]) == 1


def test_evaluate_invalid_utf8_dataset(config_path, temp_dir):
    bad_path = os.path.join(temp_dir, 'binary.csv')
    with open(bad_path, 'wb') as f:
        f.write(b"\xff\xfe,4,1\n")

    with patch('app.main.logger') as mock_logger:
        assert main(['--config', config_path, 'evaluate', '--data', bad_path]) == 1

    message = mock_logger.error.call_args[0][0]
    assert "Line 1" in message


def test_evaluate_directory_as_dataset(config_path, temp_dir):
    assert main(['--config', config_path, 'evaluate', '--data', temp_dir]) == 1


def test_evaluate_k_out_of_range(config_path):
    assert main(['--config', config_path, 'evaluate', '--k', '50']) == 1


def test_classify_named_sequences(config_path, capsys):
    exit_code = main([
        '--config', config_path, 'classify',
        '--training', os.path.join(DATA_DIR, 'training.json'),
        '--queries', os.path.join(DATA_DIR, 'testing.json'),
        '--k', '1'
    ])

    assert exit_code == 0
    assert "T1: S1 (Even)" in capsys.readouterr().out


def test_invalid_config_file(temp_dir):
    path = os.path.join(temp_dir, 'config.json')
    with open(path, 'w') as f:
        json.dump({"dataset_path": "d.csv", "k": 0}, f)

    assert main(['--config', path, 'evaluate']) == 1


def test_log_level_option(config_path, quiet_logging):
    main(['--config', config_path, '--log-level', 'DEBUG', 'evaluate'])
    quiet_logging.assert_called_with('DEBUG')


def test_save_config_records_overrides(config_path, temp_dir):
    saved_path = os.path.join(temp_dir, 'saved', 'config.json')

    exit_code = main([
        '--config', config_path, '--save-config', saved_path,
        'evaluate', '--k', '5', '--seed', '7'
    ])

    assert exit_code == 0
    saved = load_config(saved_path)
    assert saved['k'] == 5
    assert saved['random_seed'] == 7
    assert saved['train_ratio'] == 0.7
    assert saved['label_names']['S1'] == "Even"


def test_save_config_skipped_on_failure(config_path, temp_dir):
    saved_path = os.path.join(temp_dir, 'config_out.json')

    assert main(['--config', config_path, '--save-config', saved_path, 'evaluate', '--k', '50']) == 1
    assert not os.path.exists(saved_path)
