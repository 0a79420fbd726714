"""Configuration de la journalisation de l'application."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Installe un gestionnaire console sur le logger ``postboard``."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger("postboard")
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(console_handler)

    # httpx journalise chaque requête en INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
