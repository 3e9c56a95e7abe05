#!/usr/bin/env python3
"""
K8SPLIT READER - Input Acquisition
----------------------------------
Pulls the whole composite manifest into memory, either from a pipe/redirect
on stdin or from a single named file.

Author: K8Split Team
Date: 2026-10-19
"""

import logging
import os
import stat
from pathlib import Path
from typing import IO, Any, Optional, Sequence

from k8split.core.errors import ArgumentError, InputError

logger = logging.getLogger("k8split.reader")


def is_input_from_pipe(stream: Any) -> bool:
    """
    True when `stream` is not a character device (a pipe, a redirected file,
    an in-memory buffer). Streams without a file descriptor fall back to
    `isatty()`.
    """
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (AttributeError, OSError, ValueError):
        isatty = getattr(stream, "isatty", None)
        return not (isatty() if callable(isatty) else False)
    return not stat.S_ISCHR(mode)


def check_out_dir(out_dir: Path) -> Path:
    if not out_dir.exists():
        raise ArgumentError(f"output directory {out_dir} does not exist")
    if not out_dir.is_dir():
        raise ArgumentError(f"output path {out_dir} is not a directory")
    return out_dir


def check_args(args: Sequence[str], piped: bool) -> Optional[Path]:
    """
    Validates positional arguments against the input source.
    Returns the input file path, or None when reading from the pipe.
    """
    if piped and len(args) > 0:
        raise ArgumentError("stdin is a pipe but file also given")
    if len(args) > 1:
        raise ArgumentError("unknown arguments: " + " ".join(args[1:]))
    if piped:
        return None
    if not args:
        raise ArgumentError("requires exactly one input file when stdin is not a pipe")

    path = Path(args[0])
    try:
        path.stat()
    except OSError as e:
        raise ArgumentError(f"unable to open file {path} - {e.strerror or e}") from e
    return path


def _read_stream(stream: IO) -> bytes:
    buffer = getattr(stream, "buffer", None)
    data = (buffer if buffer is not None else stream).read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    return data


def read_input(path: Optional[Path], stdin: Optional[IO] = None) -> bytes:
    """Reads the entire input; `path=None` means stdin."""
    if path is None:
        logger.info("splitting pipe")
        try:
            return _read_stream(stdin)
        except OSError as e:
            raise InputError(f"could not read stdin: {e}") from e

    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as e:
        raise InputError(f"could not open file {path}: {e.strerror or e}") from e
