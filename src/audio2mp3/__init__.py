"""Batch conversion of audio files to MP3 through ffmpeg."""

from __future__ import annotations

from pathlib import Path

from audio2mp3.application.ports import Confirmer, Transcoder
from audio2mp3.application.results import BatchReport
from audio2mp3.formats import SupportedExtension, is_supported_audio

__version__ = "0.3.0"


def convert_file(
    source_path: Path,
    output_path: Path | None = None,
    *,
    copy_mode: bool = False,
    skip_existing: bool = False,
    no_confirm: bool = False,
    dry_run: bool = False,
    transcoder: Transcoder | None = None,
    confirm: Confirmer | None = None,
) -> BatchReport:
    """Convert one audio file to MP3.

    Parameters
    ----------
    source_path : Path
        Existing audio file with a supported extension.
    output_path : Path | None, default=None
        Output ``.mp3`` file, or a directory to write into. When omitted the
        MP3 is written next to the source.
    copy_mode : bool, default=False
        Stream-copy audio instead of re-encoding.
    skip_existing : bool, default=False
        Leave an existing destination untouched.
    no_confirm : bool, default=False
        Overwrite an existing destination without asking.
    dry_run : bool, default=False
        Report the intended action without writing anything.
    transcoder : Transcoder | None, default=None
        Transcoder to use; defaults to ffmpeg found on ``PATH``.
    confirm : Confirmer | None, default=None
        Overwrite prompt; defaults to an interactive terminal prompt.

    Returns
    -------
    BatchReport
        Single-entry report with the outcome and statistics.
    """
    from .api import convert_file_to_mp3 as _impl

    return _impl(
        source_path=source_path,
        output_path=output_path,
        copy_mode=copy_mode,
        skip_existing=skip_existing,
        no_confirm=no_confirm,
        dry_run=dry_run,
        transcoder=transcoder,
        confirm=confirm,
    )


def convert_directory(
    directory: Path,
    output_dir: Path | None = None,
    *,
    recursive: bool = False,
    copy_mode: bool = False,
    skip_existing: bool = False,
    no_confirm: bool = False,
    dry_run: bool = False,
    transcoder: Transcoder | None = None,
    confirm: Confirmer | None = None,
) -> BatchReport:
    """Convert every supported audio file in ``directory`` to MP3.

    Parameters
    ----------
    directory : Path
        Directory to scan.
    output_dir : Path | None, default=None
        Directory receiving all MP3s. Defaults to each source's directory.
    recursive : bool, default=False
        Include files in subdirectories.

    Returns
    -------
    BatchReport
        Per-file results in dispatch order plus run statistics.
    """
    from .api import convert_directory_to_mp3 as _impl

    return _impl(
        directory=directory,
        output_dir=output_dir,
        recursive=recursive,
        copy_mode=copy_mode,
        skip_existing=skip_existing,
        no_confirm=no_confirm,
        dry_run=dry_run,
        transcoder=transcoder,
        confirm=confirm,
    )


__all__ = [
    "SupportedExtension",
    "is_supported_audio",
    "convert_file",
    "convert_directory",
]
