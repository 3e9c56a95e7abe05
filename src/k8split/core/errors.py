#!/usr/bin/env python3
"""
K8SPLIT ERRORS
--------------
Every failure the splitter can hit is fatal. The engine raises one of the
exceptions below and the CLI turns it into a single terminating log line.

Author: K8Split Team
Date: 2026-10-19
"""

from typing import Optional


class SplitError(Exception):
    """Base class for all fatal splitter errors."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.index = index  # 0-based document position, when relevant


class ArgumentError(SplitError):
    """Bad output directory, missing input file, or ambiguous input source."""


class InputError(SplitError):
    """The input file or stdin could not be opened or read."""


class DecodeError(SplitError):
    """A document in the stream is not valid YAML or is not a mapping."""


class SchemaError(SplitError):
    """A document lacks one of the fields its output name is built from."""

    def __init__(self, message: str, field: str, index: Optional[int] = None):
        super().__init__(message, index)
        self.field = field


class MissingFieldError(SchemaError):
    """The field is absent."""


class FieldTypeError(SchemaError):
    """The field is present but has the wrong shape."""


class WriteError(SplitError):
    """An output file could not be serialized or written."""
