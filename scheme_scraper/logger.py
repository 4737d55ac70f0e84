"""Logging setup: short console lines for progress, full records in a rotating run log."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "scheme_scraper"
RUN_LOG_NAME = "scraper.log"


def setup_logger(log_dir: str = "logs", level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    if logger.handlers:
        return logger

    # Progress lines and the download summary read like plain output on stdout
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        # 10MB per file, keep 5
        run_log = RotatingFileHandler(
            os.path.join(log_dir, RUN_LOG_NAME),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
        )
        run_log.setLevel(logging.DEBUG)
        run_log.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(run_log)

    return logger
