# -*- coding: utf-8 -*-
# simplexfactory/logging_config.py

"""
Project: simplexfactory
Date: 10/18/2026

Purpose:
--------
One-call logging setup for scripts and notebooks. Library modules only
create `logging.getLogger(__name__)` loggers and never configure handlers.
"""

import logging
from typing import Union

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Configure the root logger and return the package logger.

    Parameters
    ----------
    level : int or str
        Logging level, e.g. logging.DEBUG or "WARNING".
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {name!r}")
    logging.basicConfig(level=level, format=LOG_FORMAT)
    log = logging.getLogger("simplexfactory")
    log.setLevel(level)
    return log
