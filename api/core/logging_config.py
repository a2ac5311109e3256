"""
Root logger setup for the API process.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def setup_logging(level: str | None = None) -> None:
    """
    Attach a console handler to the root logger, once.

    Repeated calls (tests re-importing the app, uvicorn reload) are no-ops.
    """
    root = logging.getLogger()
    if root.handlers:
        return None

    root.setLevel(getattr(logging, (level or log_level()).upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
