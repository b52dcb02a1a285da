"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from audio2mp3.application.options import ConversionOptions, TranscodeMode
from audio2mp3.application.ports import Confirmer, Transcoder
from audio2mp3.application.results import (
    BatchReport,
    ConversionJob,
    DispatchResult,
    JobOutcome,
    RunStatistics,
    TranscodeResult,
)
from audio2mp3.types import (
    FilesFoundHook,
    JobStartHook,
    ResultHook,
    TranscodeStartHook,
)


def build_conversion_options(
    *,
    copy_mode: bool = False,
    skip_existing: bool = False,
    no_confirm: bool = False,
    dry_run: bool = False,
    recursive: bool = False,
    output_dir: Path | None = None,
) -> ConversionOptions:
    """Build typed conversion options via lazy use-case import."""
    from audio2mp3.application.use_cases import build_conversion_options as _impl

    return _impl(
        copy_mode=copy_mode,
        skip_existing=skip_existing,
        no_confirm=no_confirm,
        dry_run=dry_run,
        recursive=recursive,
        output_dir=output_dir,
    )


def run_batch(
    *,
    directory: Path,
    options: ConversionOptions,
    transcoder: Transcoder | None = None,
    confirm: Confirmer | None = None,
    on_files_found: FilesFoundHook | None = None,
    on_start: JobStartHook | None = None,
    on_transcode: TranscodeStartHook | None = None,
    on_result: ResultHook | None = None,
) -> BatchReport:
    """Convert a directory via lazy use-case import."""
    from audio2mp3.application.use_cases import run_batch as _impl

    return _impl(
        directory=directory,
        options=options,
        transcoder=transcoder,
        confirm=confirm,
        on_files_found=on_files_found,
        on_start=on_start,
        on_transcode=on_transcode,
        on_result=on_result,
    )


def convert_single_file(
    *,
    source_path: Path,
    options: ConversionOptions,
    output_path: Path | None = None,
    transcoder: Transcoder | None = None,
    confirm: Confirmer | None = None,
    on_start: JobStartHook | None = None,
    on_transcode: TranscodeStartHook | None = None,
    on_result: ResultHook | None = None,
) -> BatchReport:
    """Convert one file via lazy use-case import."""
    from audio2mp3.application.use_cases import convert_single_file as _impl

    return _impl(
        source_path=source_path,
        options=options,
        output_path=output_path,
        transcoder=transcoder,
        confirm=confirm,
        on_start=on_start,
        on_transcode=on_transcode,
        on_result=on_result,
    )


__all__ = [
    "BatchReport",
    "ConversionJob",
    "ConversionOptions",
    "DispatchResult",
    "JobOutcome",
    "RunStatistics",
    "TranscodeMode",
    "TranscodeResult",
    "build_conversion_options",
    "run_batch",
    "convert_single_file",
]
