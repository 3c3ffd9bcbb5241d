"""
Utility functions for the table decoding pipeline.
"""

import os
import logging
from typing import Callable, Optional


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Setup logger with consistent formatting.
    
    Args:
        name: Logger name
        level: Logging level
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    return logger


def set_package_log_level(level: int):
    """
    Apply a logging level to every logger created by this package.
    
    Args:
        level: Logging level
    """
    prefix = __name__.split('.')[0]
    for name in list(logging.root.manager.loggerDict):
        if name == prefix or name.startswith(prefix + '.'):
            logging.getLogger(name).setLevel(level)


def ensure_dir(path: str) -> str:
    """
    Create directory if it doesn't exist.
    
    Args:
        path: Directory path
        
    Returns:
        Absolute path to directory
    """
    os.makedirs(path, exist_ok=True)
    return os.path.abspath(path)


def column_letter(index: int) -> str:
    """
    Spreadsheet-style column id for a zero-based index (0 -> A, 26 -> AA).
    """
    letters = ''
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def env_float(name: str, default: float,
              valid: Optional[Callable[[float], bool]] = None) -> float:
    """Read a float from the environment, falling back to default when unset or invalid."""
    raw: Optional[str] = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if valid is not None and not valid(value):
        return default
    return value


def env_int(name: str, default: int,
            valid: Optional[Callable[[int], bool]] = None) -> int:
    """Read an int from the environment, falling back to default when unset or invalid."""
    raw: Optional[str] = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if valid is not None and not valid(value):
        return default
    return value
