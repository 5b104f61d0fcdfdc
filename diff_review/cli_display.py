import logging
import os
from datetime import datetime


def setup_logger(log_dir: str = ".diff_review/logs") -> logging.Logger:
    """Attach a timestamped file handler to the package logger."""
    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"review_{timestamp}.log")

    logger = logging.getLogger("diff_review")
    logger.setLevel(logging.DEBUG)

    # File handler — captures everything
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
    ))
    logger.addHandler(fh)

    return logger


# Package logger; handlers are attached by setup_logger() from the CLI
log = logging.getLogger("diff_review")
