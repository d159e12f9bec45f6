"""
Root-logger setup for the service.

Console output always; a file as well when ``LOG_FILE`` is set. The
first call wins: when the root logger already has handlers (tests,
repeated ``create_app`` calls) nothing is changed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_handlers(logfile: Optional[str] = None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        path = Path(logfile).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the service handlers to the root logger.

    ``level`` is a level name, case insensitive; unknown names mean
    ``INFO``. ``logfile`` adds a file handler next to the console one.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in build_handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)
