"""
Logging setup for processes that drive jobs.

Handlers are attached to the ``cronjob`` package logger, so every module
logger below it (``cronjob.executor``, ``cronjob.due``, ...) is covered
while the root logger stays under the application's control.
"""

import logging
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = 'cronjob'


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the ``cronjob`` logger.

    Calling it again replaces the handlers installed by the previous call
    instead of stacking duplicates.

    Args:
        log_file: Optional file that also receives the log records
        verbose: Log at DEBUG instead of INFO

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if getattr(h, '_cronjob', False)]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    handlers = [console_handler]

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        ))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler._cronjob = True
        logger.addHandler(handler)

    return logger
