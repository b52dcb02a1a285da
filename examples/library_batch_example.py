#!/usr/bin/env python3
"""Convert a music folder from Python instead of the CLI.

Usage:
    python examples/library_batch_example.py /path/to/music [/path/to/output]
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from audio2mp3 import convert_directory
from audio2mp3.api import convert_directory_to_mp3
from audio2mp3.application.results import DispatchResult


def _progress(index: int, total: int, result: DispatchResult) -> None:
    print(f"[{index}/{total}] {result.outcome.value:<13} {result.job.source_path.name}")


def main() -> None:
    """Preview, then convert every file that has no MP3 yet."""
    if len(sys.argv) < 2:
        raise SystemExit(__doc__)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    directory = Path(sys.argv[1])
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    preview = convert_directory(
        directory, output_dir, recursive=True, skip_existing=True, dry_run=True
    )
    print(f"{preview.statistics.previewed} file(s) would be converted.")

    report = convert_directory_to_mp3(
        directory,
        output_dir,
        recursive=True,
        skip_existing=True,
        confirm=lambda _prompt: True,
        on_result=_progress,
    )
    stats = report.statistics
    print(f"processed={stats.processed} skipped={stats.skipped} failed={stats.failed}")
    raise SystemExit(report.exit_code)


if __name__ == "__main__":
    main()
