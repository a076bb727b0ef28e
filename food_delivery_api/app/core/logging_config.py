"""
Logging setup for the food delivery API.

``create_app`` calls ``setup_logging`` with the ``LOG_LEVEL`` and
``LOG_FILE`` settings.  Every module logs through
``logging.getLogger(__name__)``; services log each state change at
INFO and ownership failures at WARNING.
"""

import logging
from pathlib import Path
from typing import Optional


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Does nothing when the root logger already has handlers, so building
    several apps in one process (as the tests do) keeps a single set.
    Uvicorn's per-request access log is dropped to WARNING unless
    ``level`` is DEBUG.

    Parameters
    ----------
    level : str
        ``LOG_LEVEL`` name, case insensitive.  Unknown names fall back
        to INFO.
    logfile : Optional[str]
        ``LOG_FILE`` path.  Its parent directory is created if needed.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Request lines duplicate what the services already log.
    if numeric_level > logging.DEBUG:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
