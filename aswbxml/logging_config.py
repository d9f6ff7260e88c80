"""
Logging configuration for the WBXML tools
"""
import logging
import os
from datetime import datetime
from typing import Optional

from .config import get_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> logging.Logger:
    """Configure the root logger: console always, a timestamped file when log_dir is set"""
    current = get_settings()
    level = (level or current.LOG_LEVEL).upper()
    log_dir = current.LOG_DIR if log_dir is None else log_dir

    handlers = [logging.StreamHandler()]
    if log_dir:
        # Create logs directory if it doesn't exist
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        handlers.append(logging.FileHandler(os.path.join(log_dir, f'wbxml_{timestamp}.log')))

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger('aswbxml')
    logger.debug(f"Logging configured at {level}" + (f", file log in {log_dir}" if log_dir else ""))
    return logger
