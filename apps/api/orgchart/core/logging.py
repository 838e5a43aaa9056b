from __future__ import annotations

"""Logging setup for the org chart service."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Third-party loggers that are too chatty at DEBUG for request-per-call traffic.
QUIET_LOGGERS = ("multipart", "python_multipart")


def setup_logging(level: str = "INFO") -> str:
    """Configure root and service loggers; returns the level actually applied.

    Unknown level names (a mistyped LOG_LEVEL) fall back to INFO instead of
    stopping the app from starting.
    """
    name = str(level).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        name = "INFO"
    logging.basicConfig(level=name, format=LOG_FORMAT)
    logging.getLogger("orgchart").setLevel(name)
    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    return name
