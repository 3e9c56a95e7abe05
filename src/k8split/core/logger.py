#!/usr/bin/env python3
"""
K8SPLIT LOGGING
---------------
Routes every progress and error message to stderr through rich, keeping the
log stream apart from the files the splitter produces.

Author: K8Split Team
Date: 2026-10-19
"""

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "K8SPLIT_LOG_LEVEL"
DEFAULT_LEVEL = "INFO"


def resolve_level(level: Union[str, int, None] = None) -> int:
    """Explicit level, else $K8SPLIT_LOG_LEVEL, else INFO."""
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LEVEL)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: Union[str, int, None] = None,
                  console: Optional[Console] = None) -> logging.Logger:
    """Installs a RichHandler on the `k8split` logger and returns it."""
    console = console or Console(stderr=True)
    handler = RichHandler(
        console=console,
        show_path=False,
        show_time=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("k8split")
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    return root
