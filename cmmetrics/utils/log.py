#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import sys

logger = logging.getLogger("cmmetrics")


def get_formatter(format_str: str = "%(asctime)s %(levelname)s %(message)s") -> logging.Formatter:
    """Returns a new message formater instance that uses the standard
    log format of the check by default. You can also set another format
    if you like."""
    return logging.Formatter(format_str)


def verbosity_to_log_level(verbosity: int) -> int:
    """Values for "verbosity":

      0: disabled
      1: WARNING
      2: INFO
      3: DEBUG

    >>> verbosity_to_log_level(2)
    20
    >>> verbosity_to_log_level(7)
    10
    """
    if verbosity >= 3:
        return logging.DEBUG
    if verbosity == 2:
        return logging.INFO
    if verbosity == 1:
        return logging.WARNING
    return logging.CRITICAL


def setup_logging(verbosity: int) -> None:
    """Log to stderr, stdout is reserved for the check result"""
    logger.handlers[:] = []
    if verbosity <= 0:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL)
        logger.propagate = False
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(get_formatter())
    logger.addHandler(handler)
    logger.setLevel(verbosity_to_log_level(verbosity))
    logger.propagate = False
