import logging
from pathlib import Path


LOGGER_NAMES = ("knn", "app")


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Configure logging for the classifier and its command-line driver.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance for the application
    """
    level = getattr(logging, log_level.upper())

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Avoid duplicate handlers
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        for handler in logger.handlers:
            handler.setLevel(level)

    return logging.getLogger("app")


def ensure_parent_directory(path: str) -> None:
    """Create the directory that will hold path if it doesn't exist."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
