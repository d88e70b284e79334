"""
Application logging - file handler under the per-user app_log directory
"""
import logging
from pathlib import Path
from typing import Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_dir: Path, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Attach a file handler to the package logger

    Args:
        log_dir: Directory that receives sckm.log
        level: Logging level name or number

    Returns:
        The configured 'SCKM' logger
    """
    logger = logging.getLogger('SCKM')
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    # Create file handler if not already exists
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "sckm.log", encoding='utf-8')
        file_handler.setLevel(level)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
