#!/usr/bin/env python3
"""
K8SPLIT CORE MODELS
-------------------
Plain data carriers shared by the engine, the splitting helpers and the CLI.

Author: K8Split Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

DEFAULT_FILE_MODE = 0o644


@dataclass
class SplitConfig:
    """Run options, built once by the CLI."""
    out_dir: Path = Path(".")
    dry_run: bool = False           # Decode and name everything, write nothing
    canonical_order: bool = False   # Reorder keys as apiVersion, kind, metadata, ...
    quiet: bool = False
    log_level: Optional[str] = None
    file_mode: int = DEFAULT_FILE_MODE


@dataclass
class NameRegistry:
    """
    Occurrence counter per base-name for one run.

    Keys are lower-cased so that `Pod-foo` and `pod-foo` share a slot, which
    keeps two documents from ever landing on the same output file.
    """
    counts: Dict[str, int] = field(default_factory=dict)

    def count(self, base_name: str) -> int:
        return self.counts.get(base_name.lower(), 0)

    def bump(self, base_name: str) -> int:
        """Returns the count before the increment."""
        key = base_name.lower()
        current = self.counts.get(key, 0)
        self.counts[key] = current + 1
        return current

    def __len__(self) -> int:
        return len(self.counts)


@dataclass
class WrittenFile:
    index: int        # Position of the document in the input stream
    kind: str
    name: str
    filename: str
    path: Path
    written: bool = True


@dataclass
class SplitResult:
    """Outcome of a complete run."""
    documents_read: int = 0
    skipped: int = 0
    files: List[WrittenFile] = field(default_factory=list)

    @property
    def written(self) -> int:
        return sum(1 for f in self.files if f.written)
