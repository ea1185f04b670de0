#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the chat2md command line.

Library modules only create module-level loggers; handlers are installed here
when the CLI starts so that embedding applications keep control of logging.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str, verbose: bool = False, trace: bool = False) -> int:
    """Pick the effective level from the CLI logging flags.

    ``trace`` wins over ``verbose``, and ``verbose`` only lowers the level when
    no explicit level other than the WARNING default was requested.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    verbose : bool, default False
        Whether ``--verbose`` was given.
    trace : bool, default False
        Whether ``--trace`` was given.

    Returns
    -------
    int
        Numeric logging level.

    """
    if trace:
        return logging.DEBUG
    resolved = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.WARNING)
    if verbose and resolved == logging.WARNING:
        return logging.DEBUG
    return resolved


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optional file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file that receives a copy of the output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        TRACE_FORMAT if trace_mode else SIMPLE_FORMAT,
        datefmt=TRACE_DATE_FORMAT if trace_mode else None,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
