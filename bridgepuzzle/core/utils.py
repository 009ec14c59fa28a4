"""
Utility functions for the bridge puzzle engine.
"""

import logging
from pathlib import Path
from typing import Optional, Dict, Any, Union
import json
import time
from functools import wraps

import yaml

from .. import config


def setup_logger(name: str, log_file: Optional[Path] = None,
                 level: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level, config.LOG_LEVEL when not given

    Returns:
        Configured logger
    """
    level = level or config.LOG_LEVEL
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator to time function execution"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        execution_time = time.perf_counter() - start_time

        # Log through the instance logger when there is one
        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {execution_time:.4f} seconds")
        else:
            logging.getLogger(func.__module__).debug(
                f"{func.__name__} took {execution_time:.4f} seconds")

        return result
    return wrapper


def load_puzzle_spec(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a declarative puzzle spec from a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the suffix is unsupported or the document is not a mapping
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    suffix = filepath.suffix.lower()
    with open(filepath, 'r') as f:
        if suffix in config.JSON_SUFFIXES:
            data = json.load(f)
        elif suffix in config.YAML_SUFFIXES:
            data = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported puzzle file format: {filepath.suffix}")

    if not isinstance(data, dict):
        raise ValueError(f"Puzzle file {filepath} does not contain a mapping")

    return data


def save_puzzle_spec(data: Dict[str, Any], filepath: Union[str, Path]):
    """Write a puzzle spec as JSON or YAML depending on the file suffix"""
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()

    with open(filepath, 'w') as f:
        if suffix in config.YAML_SUFFIXES:
            yaml.safe_dump(data, f, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
