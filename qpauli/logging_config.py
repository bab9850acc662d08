# qpauli/logging_config.py
from __future__ import annotations

import logging
from typing import Optional

from qpauli.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure root logging once for applications; library modules only create loggers."""
    lvl = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    logger = logging.getLogger("qpauli")
    logger.setLevel(lvl)
    return logger
