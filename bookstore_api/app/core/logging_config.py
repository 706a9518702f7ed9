"""
Logging setup for the catalog service.

Log records from the ``bookstore_api`` package go to the console and,
when ``LOG_FILE`` is set, to a file as well.  Other libraries keep their
own configuration (uvicorn installs its own handlers), so only the root
logger is touched: its level always follows ``LOG_LEVEL``, and its
handlers are installed once.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "bookstore_api"


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure logging for the service.

    Parameters
    ----------
    level : str
        Level name for the root logger (e.g. ``"DEBUG"``).
        Case insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Optional path of a file that receives the same records as the
        console.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        # Already configured, e.g. by pytest or a repeated create_app call.
        return
    for handler in _build_handlers(logfile):
        root.addHandler(handler)
