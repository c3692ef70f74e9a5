"""Logging setup for applications embedding an operator."""

import logging
import os
import sys
from typing import Optional, Union


def setup_logging(level: Optional[Union[str, int]] = None, log_file: Optional[str] = None) -> None:
    """Setup logging configuration.

    The level falls back to DYNCONFIG_LOG_LEVEL, then INFO.
    """
    if level is None:
        level = os.getenv("DYNCONFIG_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )
