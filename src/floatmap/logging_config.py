# src/floatmap/logging_config.py
import logging
import sys
from pathlib import Path

from .config import Config


def setup_logging(config: Config) -> logging.Logger:
    """Setup file and console logging from configuration"""
    log_level = config.get('logging.level', 'INFO')
    log_format = config.get('logging.format',
                            '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    log_file = Path(config.get('logging.file', 'logs/floatmap.log'))

    # Ensure logs directory exists
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(log_format)

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    # Avoid duplicate handlers on repeated setup (Streamlit reruns)
    for handler in list(root_logger.handlers):
        if getattr(handler, '_floatmap', False):
            root_logger.removeHandler(handler)
            handler.close()

    for handler in (file_handler, console_handler):
        handler._floatmap = True
        root_logger.addHandler(handler)

    return logging.getLogger('floatmap')
