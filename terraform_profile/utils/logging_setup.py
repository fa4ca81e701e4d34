"""
Logging setup for terraform-profile.

Logs go to stderr so they never mix with command output on stdout.
Default level is WARNING; TERRAFORM_PROFILE_LOG_LEVEL or --verbose raise it.
"""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "TERRAFORM_PROFILE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging(verbose: bool = False, level_name: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        verbose: Force DEBUG level
        level_name: Level name to use instead of the environment variable

    Returns:
        logging.Logger: The configured "terraform_profile" logger
    """
    if verbose:
        level_name = "DEBUG"
    elif level_name is None:
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    level_name = level_name.upper()
    level = getattr(logging, level_name, logging.WARNING)

    logger = logging.getLogger("terraform_profile")
    logger.setLevel(level)
    logger.propagate = False

    # Idempotent when main() runs more than once in a process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    logger.debug("Logging initialized at level %s", level_name)
    return logger
