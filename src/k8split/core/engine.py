#!/usr/bin/env python3
"""
K8SPLIT ENGINE - The Orchestrator
---------------------------------
Drives one split run from start to finish:

    validate args -> acquire input -> { decode -> skip | name -> write }* -> done

The first error stops the run. Files already written stay on disk.

Author: K8Split Team
Date: 2026-10-19
"""

import logging
import os
from pathlib import Path
from typing import IO, Optional, Sequence

from k8split.core.errors import WriteError
from k8split.core.models import NameRegistry, SplitConfig, SplitResult, WrittenFile
from k8split.splitting.decoder import DocumentDecoder
from k8split.splitting.exporter import ManifestExporter
from k8split.splitting.naming import assign_filename, base_name, extract_identity
from k8split.splitting.reader import check_args, check_out_dir, is_input_from_pipe, read_input

logger = logging.getLogger("k8split.engine")


class SplitEngine:
    """
    Splits a composite manifest into one file per document.
    A fresh NameRegistry is used for every run unless one is supplied.
    """

    def __init__(self, config: Optional[SplitConfig] = None):
        self.config = config or SplitConfig()
        self.out_dir = Path(self.config.out_dir)
        self.exporter = ManifestExporter(self.config.canonical_order)

    def split_stream(self, args: Sequence[str], stdin: Optional[IO] = None) -> SplitResult:
        """
        Full CLI contract: checks the output directory first, then the input
        source, then reads and splits.
        """
        check_out_dir(self.out_dir)
        piped = stdin is not None and is_input_from_pipe(stdin)
        path = check_args(args, piped)
        data = read_input(path, stdin)
        return self.run(data)

    def run(self, data: bytes, registry: Optional[NameRegistry] = None) -> SplitResult:
        """Splits an in-memory buffer into the output directory."""
        registry = registry if registry is not None else NameRegistry()
        result = SplitResult()
        decoder = DocumentDecoder(data)

        for document in decoder:
            kind, name = extract_identity(document.data, document.index)
            text = self.exporter.export(document.data, document.index)
            filename = assign_filename(base_name(kind, name), registry)
            target = self.out_dir / filename
            if target.resolve().parent != self.out_dir.resolve():
                logger.warning("File %s from yaml document %d lands outside %s",
                               filename, document.index, self.out_dir)

            if self.config.dry_run:
                logger.info("Would write file: %s", filename)
            else:
                logger.info("Writing file: %s", filename)
                self._write(target, text)

            result.files.append(WrittenFile(
                index=document.index, kind=kind, name=name,
                filename=filename, path=target, written=not self.config.dry_run))

        result.documents_read = decoder.position
        result.skipped = decoder.skipped

        logger.debug("Processed %d documents (%d empty, %d named)",
                     result.documents_read, result.skipped, len(result.files))
        return result

    def _write(self, target: Path, content: str):
        """Creates or truncates `target`; the mode applies on creation."""
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
        try:
            fd = os.open(target, flags, self.config.file_mode)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as e:
            raise WriteError(f"error writing file: {target}: {e.strerror or e}") from e
