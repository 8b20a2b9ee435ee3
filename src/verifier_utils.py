"""
Utility functions for the receipt verifier: configuration and logging.
"""

import copy
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "verifier_config.yaml"


def default_config() -> Dict[str, Any]:
    """Built-in defaults, used for anything the YAML file leaves out."""
    return {
        'provider': 'dashen',
        'logging': {
            'level': 'INFO',
            'file': 'logs/receipt_verifier.log',
        },
        'fetch': {
            'url_template': 'https://receipt.dashensuperapp.com/receipt/{reference}',
            'timeout_seconds': 30,
            'verify_tls': False,
            'headers': {
                'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64)',
                'Accept': 'application/pdf',
            },
        },
        'upload': {
            'max_file_size_mb': 10,
            'allowed_extensions': ['.pdf', '.html', '.htm'],
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML, layered over the defaults.

    Args:
        config_path: Path to YAML file (default: config/verifier_config.yaml)

    Returns:
        Configuration dict
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return default_config()

    with open(config_path, 'r', encoding='utf-8') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(loaded).__name__}")

    return _deep_merge(default_config(), loaded)


def ensure_directory(dir_path: str) -> str:
    """Create the directory if needed and return its absolute path."""
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return str(path.absolute())


def setup_logging(log_file: Optional[str] = "logs/receipt_verifier.log", level: str = "INFO"):
    """
    Setup logging configuration

    Args:
        log_file: Path to log file (None disables the file sink)
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logger.remove()

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )

    if log_file:
        ensure_directory(os.path.dirname(log_file) or ".")
        logger.add(
            log_file,
            rotation="10 MB",
            retention="30 days",
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {extra} | {message}"
        )

    logger.info("Logging initialized")


def format_processing_time(milliseconds: int) -> str:
    """
    Format processing time in human-readable format

    Returns:
        Formatted string (e.g., "1.23s", "456ms")
    """
    if milliseconds < 1000:
        return f"{milliseconds}ms"
    seconds = milliseconds / 1000
    return f"{seconds:.2f}s"
