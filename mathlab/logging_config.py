"""
Logging setup for the Math Lab page.

Modules log through ``logging.getLogger(__name__)``, so everything lives under
the "mathlab" logger. Streamlit re-executes the page script on every widget
interaction and app.py calls setup_logging() each time; the previous handlers
are closed and replaced on each call so reruns neither duplicate lines nor
keep log files open.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "mathlab"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    (Re)configure the package logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path; log lines are appended to it as well as stdout.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _close_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging at %s%s", logging.getLevelName(level), f" (also to {log_file})" if log_file else "")
    return logger
