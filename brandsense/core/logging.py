# File: brandsense/core/logging.py

"""
Logging setup shared by the API and the CLI.

Modules log through ``logging.getLogger(__name__)``; this only installs the
root handler once and exposes the request outcome helper used by routes.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    global _configured
    if _configured:
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    _configured = True


def log_response(logger: logging.Logger, status_code: int, message: str) -> None:
    """Log a request outcome at a level matching its status class."""
    if status_code < 300:
        logger.info("%s - %s", status_code, message)
    elif status_code < 500:
        logger.warning("%s - %s", status_code, message)
    else:
        logger.error("%s - %s", status_code, message)
