#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Centralized logging utilities for docbook2adoc entry points."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    use_rich: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the command-line interface.

    Conversion diagnostics (unknown elements, unresolved callouts, table
    column mismatches) are emitted as warnings, so the default level shows
    them.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.
    use_rich : bool, default False
        Route console diagnostics through a rich handler on stderr.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler: logging.Handler
    if use_rich:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=trace_mode,
            show_path=trace_mode,
            markup=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
    console_handler.setLevel(resolved_level)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)
        except OSError as exc:  # pragma: no cover - handled at runtime
            root_logger.warning("Could not create log file %s: %s", log_file, exc)

    return root_logger
