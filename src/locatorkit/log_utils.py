from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DEFAULT_LOG_DIR = Path.home() / ".locatorkit"


def build_logger(name: str = "locatorkit.engine", log_dir: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    logger.propagate = False
    try:
        directory = log_dir or DEFAULT_LOG_DIR
        directory.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(directory / "engine.log", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)
    except OSError:
        # Log folder is not writable; stderr only.
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(stream_handler)
    return logger
