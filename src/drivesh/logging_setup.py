"""Logging configuration for the drivesh command line."""

from __future__ import annotations

import logging


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging. DEBUG adds timestamps and logger names."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    if numeric <= logging.DEBUG:
        logging.basicConfig(
            level=numeric,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("drivesh").setLevel(logging.DEBUG)
        # googleapiclient logs every discovery/request at DEBUG
        logging.getLogger("googleapiclient").setLevel(logging.INFO)
    else:
        logging.basicConfig(level=numeric, format="%(levelname)s: %(message)s")
