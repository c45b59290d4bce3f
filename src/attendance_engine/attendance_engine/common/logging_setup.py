from __future__ import annotations

import logging

# Root logger of this package, whichever import path loaded it.
PACKAGE_LOGGER = __name__.rsplit(".", 2)[0]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler to the package logger.

    Safe to call more than once (app factory in tests); handlers are replaced.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.setLevel(log_level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(log_level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
