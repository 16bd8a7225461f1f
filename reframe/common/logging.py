# reframe/common/logging.py
from __future__ import annotations

import logging


def get_logger(name: str = "reframe", level: int | str | None = None) -> logging.Logger:
    """
    Return a namespaced logger.
    If the root logger has no handlers yet, we add a basicConfig once so
    library users get readable output without wiring logging themselves.
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if level is not None:
        logger.setLevel(level)
    return logger
