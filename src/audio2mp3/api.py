"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from audio2mp3.adapters.transcoders import FfmpegTranscoder
from audio2mp3.application.ports import Confirmer, Transcoder
from audio2mp3.application.results import BatchReport
from audio2mp3.application.use_cases import build_conversion_options
from audio2mp3.application.use_cases import convert_single_file
from audio2mp3.application.use_cases import run_batch
from audio2mp3.types import (
    FilesFoundHook,
    JobStartHook,
    ResultHook,
    TranscodeStartHook,
)


def convert_file_to_mp3(
    source_path: Path,
    output_path: Optional[Path] = None,
    copy_mode: bool = False,
    skip_existing: bool = False,
    no_confirm: bool = False,
    dry_run: bool = False,
    ffmpeg: str = "ffmpeg",
    timeout: Optional[float] = None,
    transcoder: Optional[Transcoder] = None,
    confirm: Optional[Confirmer] = None,
    on_start: Optional[JobStartHook] = None,
    on_transcode: Optional[TranscodeStartHook] = None,
    on_result: Optional[ResultHook] = None,
) -> BatchReport:
    """Convert a single audio file to MP3."""
    options = build_conversion_options(
        copy_mode=copy_mode,
        skip_existing=skip_existing,
        no_confirm=no_confirm,
        dry_run=dry_run,
    )
    return convert_single_file(
        source_path=source_path,
        options=options,
        output_path=output_path,
        transcoder=transcoder or FfmpegTranscoder(ffmpeg, timeout=timeout),
        confirm=confirm,
        on_start=on_start,
        on_transcode=on_transcode,
        on_result=on_result,
    )


def convert_directory_to_mp3(
    directory: Path,
    output_dir: Optional[Path] = None,
    recursive: bool = False,
    copy_mode: bool = False,
    skip_existing: bool = False,
    no_confirm: bool = False,
    dry_run: bool = False,
    ffmpeg: str = "ffmpeg",
    timeout: Optional[float] = None,
    transcoder: Optional[Transcoder] = None,
    confirm: Optional[Confirmer] = None,
    on_files_found: Optional[FilesFoundHook] = None,
    on_start: Optional[JobStartHook] = None,
    on_transcode: Optional[TranscodeStartHook] = None,
    on_result: Optional[ResultHook] = None,
) -> BatchReport:
    """Convert every supported audio file in a directory to MP3."""
    options = build_conversion_options(
        copy_mode=copy_mode,
        skip_existing=skip_existing,
        no_confirm=no_confirm,
        dry_run=dry_run,
        recursive=recursive,
        output_dir=output_dir,
    )
    return run_batch(
        directory=directory,
        options=options,
        transcoder=transcoder or FfmpegTranscoder(ffmpeg, timeout=timeout),
        confirm=confirm,
        on_files_found=on_files_found,
        on_start=on_start,
        on_transcode=on_transcode,
        on_result=on_result,
    )
