# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import json
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union


class JsonFormatter(logging.Formatter):
    """Formats each record as one JSON object per line."""

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        return json.dumps(log_record)


def configure_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console (and optionally JSON file) handlers to the library logger.

    Safe to call repeatedly: handlers of each kind are only added once.
    """
    logger = logging.getLogger("schema_cleaner")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    # Prevent logs from propagating to the root logger
    logger.propagate = False

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(console)

    if log_file and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # Use a rotating file handler to keep log files from growing too large
        handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=2,
        )
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

    return logger
