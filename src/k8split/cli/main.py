#!/usr/bin/env python3
"""
K8SPLIT CLI
-----------
Split a composite YAML file into multiple distinct files.

    k8split -o <dir> <file>
    cat all.yaml | k8split -o <dir>

Author: K8Split Team
Date: 2026-10-19
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import IO, List, Optional

from rich.console import Console
from rich.table import Table

from k8split.core.engine import SplitEngine
from k8split.core.errors import SplitError
from k8split.core.logger import setup_logging
from k8split.core.models import SplitConfig, SplitResult

__version__ = "1.0.0"

logger = logging.getLogger("k8split.cli")


class K8SplitCLI:
    """
    Translates command-line flags into a SplitConfig, runs the engine and
    reports. Every SplitError ends the process with status 1.
    """

    def __init__(self, console: Optional[Console] = None):
        # stdout stays free; logs and reports both go to stderr
        self.console = console or Console(stderr=True)
        self.parser = argparse.ArgumentParser(
            prog="k8split",
            usage="k8split -o <dir> <file>",
            description="Split a composite yaml file into multiple distinct files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-V", "--version", action="version", version=f"k8split v{__version__}")
        self.parser.add_argument("-o", "--outdir", default=".", help="The name of the directory.")
        self.parser.add_argument("--dry-run", action="store_true", help="Preview file names without writing")
        self.parser.add_argument("--canonical-order", action="store_true",
                                 help="Emit apiVersion, kind, metadata, spec, data, status first")
        self.parser.add_argument("-q", "--quiet", action="store_true", help="Do not print the split report")
        self.parser.add_argument("--log-level", default=None,
                                 help="DEBUG, INFO, WARNING, ... (default: $K8SPLIT_LOG_LEVEL or INFO)")
        self.parser.add_argument("files", nargs="*", metavar="file", help="Composite YAML file (omit when piping)")

    def build_config(self, args: argparse.Namespace) -> SplitConfig:
        return SplitConfig(
            out_dir=Path(args.outdir),
            dry_run=args.dry_run,
            canonical_order=args.canonical_order,
            quiet=args.quiet,
            log_level=args.log_level,
        )

    def _render_report(self, result: SplitResult, config: SplitConfig):
        title = "Split Report (dry run)" if config.dry_run else "Split Report"
        table = Table(title=title, header_style="bold magenta")
        table.add_column("Doc", justify="right")
        table.add_column("Kind", style="white")
        table.add_column("Name", style="cyan")
        table.add_column("File", style="green")

        for f in result.files:
            table.add_row(str(f.index), f.kind, f.name, f.filename)

        if result.files:
            self.console.print(table)
        self.console.print(
            f"Documents: {result.documents_read}  "
            f"Skipped: {result.skipped}  "
            f"Written: {result.written}",
            highlight=False,
        )

    def run(self, argv: Optional[List[str]] = None, stdin: Optional[IO] = None) -> int:
        args = self.parser.parse_args(argv)
        config = self.build_config(args)
        setup_logging(config.log_level, console=self.console)

        engine = SplitEngine(config)
        try:
            result = engine.split_stream(args.files, stdin=stdin)
        except SplitError as e:
            logger.critical(e.message)
            return 1

        if not config.quiet:
            self._render_report(result, config)
        return 0


def main(argv: Optional[List[str]] = None, stdin: Optional[IO] = None) -> int:
    """Application entry point with interrupt handling."""
    try:
        return K8SplitCLI().run(argv, stdin=sys.stdin if stdin is None else stdin)
    except KeyboardInterrupt:
        Console(stderr=True).print("\n[bold red]Terminated by user.[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
