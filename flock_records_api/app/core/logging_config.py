"""
Logging setup for the Flock Records API.

Services and the document store log through ``logging.getLogger(__name__)``.
Saves, updates and deletes are logged at INFO, and data files that cannot
be read are logged at WARNING.  ``setup_logging`` sends all of it to the
console and, when ``LOG_FILE`` is set, to a file as well.
"""

import logging
from pathlib import Path
from typing import Optional


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Does nothing if the root logger already has handlers, which is the
    case when uvicorn or a test runner configured logging first.

    Parameters
    ----------
    level : str
        Name of the level from ``LOG_LEVEL``, e.g. ``"DEBUG"``.  Unknown
        names fall back to ``INFO``.
    logfile : Optional[str]
        Value of ``LOG_FILE``.  Missing parent directories are created.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
