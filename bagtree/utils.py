import logging
import os
import pathlib
from logging.handlers import RotatingFileHandler

from bagtree.const import (
    BT_LOGGING_BACKUP_COUNT,
    BT_LOGGING_FORMAT,
    BT_LOGGING_LOG_LEVEL,
    BT_LOGGING_MAX_BYTES,
)


def _logs_to(logger: logging.Logger, log_path: pathlib.Path) -> bool:
    target = os.path.abspath(log_path)
    return any(isinstance(h, RotatingFileHandler) and h.baseFilename == target for h in logger.handlers)


def get_logger(name: str, level: int = BT_LOGGING_LOG_LEVEL, log_path: pathlib.Path | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    formatter = logging.Formatter(BT_LOGGING_FORMAT)

    if not logger.hasHandlers():
        logger.setLevel(level or BT_LOGGING_LOG_LEVEL)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level or BT_LOGGING_LOG_LEVEL)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # the file handler is attached even when an ancestor already handles the logger
    if log_path and not _logs_to(logger, log_path):
        logger.setLevel(level or BT_LOGGING_LOG_LEVEL)
        if not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)

        rot_file_handler = RotatingFileHandler(
            log_path,
            maxBytes=BT_LOGGING_MAX_BYTES,
            backupCount=BT_LOGGING_BACKUP_COUNT,
        )
        rot_file_handler.setLevel(level or BT_LOGGING_LOG_LEVEL)
        rot_file_handler.setFormatter(formatter)
        logger.addHandler(rot_file_handler)

    return logger
