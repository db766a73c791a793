"""Logging setup shared by the relay server modules."""

import logging

LOGGER_NAME = "relay_server"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _normalize_level(raw: str) -> int:
    candidate = str(raw or "INFO").strip().upper()
    return {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
    }.get(candidate, logging.INFO)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the project logger once; later calls only adjust the level."""
    project_logger = logging.getLogger(LOGGER_NAME)
    resolved_level = _normalize_level(level)
    project_logger.setLevel(resolved_level)

    if not project_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        project_logger.addHandler(handler)

    return project_logger
