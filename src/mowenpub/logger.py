"""Logging configuration for mowenpub."""

import logging
import sys

from mowenpub.config import settings

# Single app logger that can be imported throughout the package
logger = logging.getLogger("mowenpub")


def setup_logging() -> None:
    """Configure application logging.

    Logs go to stderr so stdout stays free for payload dumps.
    Sets up a single app logger (mowenpub) that can be controlled via MOWENPUB_DEBUG.
    """
    # Clear existing handlers to prevent duplicate log entries on repeated setup
    logging.root.handlers = []

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    app_log_level = logging.DEBUG if settings.mowenpub_debug else logging.INFO
    logger.setLevel(app_log_level)

    level_name = "DEBUG" if settings.mowenpub_debug else "INFO"
    logger.info("mowenpub logging initialized at %s level", level_name)
