#!/usr/bin/env python3
"""
K8SPLIT DECODER - Record Decoding
---------------------------------
Walks a multi-document YAML buffer one document at a time. Documents are
handed out as round-trip CommentedMaps so comments and quoting survive the
trip to their own file.

Decoding is a single forward pass: a malformed document further down the
stream is only discovered after everything before it has been handed out.

Author: K8Split Team
Date: 2026-10-19
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from k8split.core.errors import DecodeError

logger = logging.getLogger("k8split.decoder")


def build_yaml() -> YAML:
    """Round-trip YAML instance shared by decoding and export."""
    yaml = YAML(typ='rt')
    yaml.preserve_quotes = True
    # Standard K8s: 2 spaces, sequences indented 4 with the dash at offset 2
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 4096
    return yaml


@dataclass
class Document:
    index: int   # 0-based position in the stream, empty documents included
    data: Any


class DocumentDecoder:
    """
    Iterates the non-empty documents of one buffer.

    `position` is the number of documents consumed so far and `skipped` the
    number of empty ones among them. Both are readable after iteration ends.
    """

    def __init__(self, data: bytes, yaml: Optional[YAML] = None):
        self.data = data
        self.yaml = yaml or build_yaml()
        self.position = 0
        self.skipped = 0
        self._started = False

    def _text(self) -> str:
        if isinstance(self.data, str):
            return self.data
        try:
            return self.data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"error reading yaml document 0: {e}", 0) from e

    def __iter__(self) -> Iterator[Document]:
        if self._started:
            raise RuntimeError("DocumentDecoder is single-pass and was already consumed")
        self._started = True
        return self._documents()

    def _documents(self) -> Iterator[Document]:
        stream = self.yaml.load_all(self._text())
        while True:
            index = self.position
            try:
                doc = next(stream)
            except StopIteration:
                return
            except YAMLError as e:
                raise DecodeError(f"error reading yaml document {index}: {e}", index) from e
            except RecursionError as e:
                raise DecodeError(f"error reading yaml document {index}: nesting too deep", index) from e
            self.position += 1

            if doc is None or (isinstance(doc, Mapping) and len(doc) == 0):
                logger.debug("Skipping empty yaml document %d", index)
                self.skipped += 1
                continue

            if not isinstance(doc, Mapping):
                raise DecodeError(
                    f"error reading yaml document {index}: expected a mapping, "
                    f"got {type(doc).__name__}", index)

            yield Document(index=index, data=doc)
