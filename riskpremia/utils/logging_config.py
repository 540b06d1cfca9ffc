"""
Logging configuration for the Risk Premia engine.

Provides module-based loggers with timestamps and proper formatting.
All logs are written to a single log file per session:
logs/riskpremia_log_<datetime>.log

Modules only call logging.getLogger('<AREA>.<COMPONENT>'); handlers are
attached by entry points (the CLI) through setup_logger().
"""
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Optional

# Global shared log file path (created once per session)
_SHARED_LOG_FILE: Optional[Path] = None

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _get_shared_log_file(log_dir: Path = Path("logs")) -> Path:
    """
    Get or create the shared log file path.

    Returns:
        Path to shared log file
    """
    global _SHARED_LOG_FILE

    if _SHARED_LOG_FILE is None:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y-%m-%d_%H%M%S')
        _SHARED_LOG_FILE = log_dir / f"riskpremia_log_{timestamp}.log"

    return _SHARED_LOG_FILE


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_to_console: bool = True,
    log_dir: Path = Path("logs"),
) -> logging.Logger:
    """
    Setup a logger with file and optional console handlers.

    Follows format: "YYYY-MM-DD HH:MM:SS | MODULE.NAME | LEVEL | Message".
    Configuring a parent name ('CORE', 'LIVE', or '' for root) covers
    every child logger such as 'CORE.ENGINE'.

    Args:
        name: Logger name (e.g., 'CORE', 'LIVE.RUNNER', '' for root)
        level: Logging level (logging.DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_console: Whether to also output to console
        log_dir: Directory for the shared log file

    Returns:
        Configured Logger instance

    Example:
        logger = setup_logger('CLI', level=logging.DEBUG)
        logger.info("Evaluating 2020-07-30")
        # 2020-07-30 21:10:02 | CLI | INFO | Evaluating 2020-07-30
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = logging.handlers.RotatingFileHandler(
        _get_shared_log_file(log_dir),
        maxBytes=50 * 1024 * 1024,  # 50MB
        backupCount=10,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get existing logger or create new one with default settings.

    Example:
        logger = get_logger('LIVE.RUNNER')
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger
