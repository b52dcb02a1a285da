"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

import logging
import stat
import time
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from audio2mp3.adapters.prompts import TyperConfirmer
from audio2mp3.adapters.transcoders import FfmpegTranscoder
from audio2mp3.application.options import ConversionOptions
from audio2mp3.application.ports import Confirmer, Transcoder
from audio2mp3.application.results import (
    BatchReport,
    ConversionJob,
    DispatchResult,
    JobOutcome,
    RunStatistics,
)
from audio2mp3.errors import (
    AccessDeniedError,
    InvalidArgumentsError,
    NoFilesFoundError,
    PathNotFoundError,
    UnsupportedFormatError,
)
from audio2mp3.formats import (
    OUTPUT_SUFFIX,
    extension_of,
    is_supported_audio,
    mp3_name_for,
    supported_formats_label,
)
from audio2mp3.schemas import DirectoryConversionConfig, FileConversionConfig
from audio2mp3.types import (
    FilesFoundHook,
    JobStartHook,
    ResultHook,
    TranscodeStartHook,
)

logger = logging.getLogger(__name__)

BATCH_PROMPT = "Do you want to proceed with conversion?"


def build_conversion_options(
    *,
    copy_mode: bool = False,
    skip_existing: bool = False,
    no_confirm: bool = False,
    dry_run: bool = False,
    recursive: bool = False,
    output_dir: Path | None = None,
) -> ConversionOptions:
    """Build typed conversion options from primitive values."""
    return ConversionOptions(
        copy_mode=copy_mode,
        skip_existing=skip_existing,
        no_confirm=no_confirm,
        dry_run=dry_run,
        recursive=recursive,
        output_dir=output_dir,
    )


# -----------------------------
# File collection
# -----------------------------
def _mode_of(path: Path, *, follow_symlinks: bool = True) -> int | None:
    """``st_mode`` of ``path``, or ``None`` when nothing exists there."""
    try:
        return path.stat(follow_symlinks=follow_symlinks).st_mode
    except (FileNotFoundError, NotADirectoryError):
        return None
    except PermissionError as exc:
        raise AccessDeniedError(path, "cannot read file status") from exc


def _list_directory(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except PermissionError as exc:
        raise AccessDeniedError(directory, "directory is not readable") from exc


def _walk(directory: Path, recursive: bool, found: list[Path]) -> None:
    # Symlinks are neither followed into nor collected.
    for entry in _list_directory(directory):
        mode = _mode_of(entry, follow_symlinks=False)
        if mode is None:
            continue
        if stat.S_ISDIR(mode):
            if recursive:
                _walk(entry, recursive, found)
        elif stat.S_ISREG(mode) and is_supported_audio(entry.name):
            found.append(entry)


def collect_audio_files(root: Path, recursive: bool = False) -> list[Path]:
    """Collect supported audio files under ``root``.

    Parameters
    ----------
    root : Path
        Directory to scan.
    recursive : bool, default=False
        Descend into subdirectories when ``True``; otherwise only immediate
        children are considered.

    Returns
    -------
    list[Path]
        Matching files in lexicographic path order.

    Raises
    ------
    PathNotFoundError
        If ``root`` does not exist or is not a directory.
    AccessDeniedError
        If any directory encountered during the walk cannot be listed, or an
        entry's status cannot be read. The
        whole collection is aborted rather than returning partial results.
    """
    mode = _mode_of(root)
    if mode is None or not stat.S_ISDIR(mode):
        raise PathNotFoundError(root, "Directory")
    found: list[Path] = []
    _walk(root, recursive, found)
    return sorted(found)


# -----------------------------
# Job planning
# -----------------------------
def destination_for(source: Path, output_dir: Path | None = None) -> Path:
    """Destination MP3 path for ``source`` in ``output_dir`` or beside it."""
    return (output_dir or source.parent) / mp3_name_for(source)


def resolve_single_destination(source: Path, output: Path | None) -> Path:
    """Destination for single-file mode.

    ``output`` names the MP3 itself when it ends in ``.mp3`` and is not an
    existing directory; otherwise it is the directory to write into.
    """
    if output is None:
        return destination_for(source)
    if output.suffix.lower() == OUTPUT_SUFFIX:
        mode = _mode_of(output)
        if mode is None or not stat.S_ISDIR(mode):
            return output
    return destination_for(source, output)


def plan_jobs(files: Sequence[Path], options: ConversionOptions) -> list[ConversionJob]:
    """Create one job per file, preserving order."""
    return [
        ConversionJob(
            source_path=path,
            destination_path=destination_for(path, options.output_dir),
            mode=options.mode,
        )
        for path in files
    ]


# -----------------------------
# Dispatch
# -----------------------------
def _ensure_directory(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except PermissionError as exc:
        raise AccessDeniedError(directory, "cannot create output directory") from exc
    except OSError as exc:
        raise AccessDeniedError(
            directory,
            f"cannot create output directory: {exc.strerror or exc}",
            reason="Cannot write",
        ) from exc


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def dispatch_job(
    job: ConversionJob,
    options: ConversionOptions,
    *,
    transcoder: Transcoder,
    confirm: Confirmer,
    on_transcode: TranscodeStartHook | None = None,
) -> DispatchResult:
    """Use-case: convert one source file, honoring conflict and mode policy.

    Exactly one of processed / skipped / failed / would-convert is returned.
    ``skip_existing`` takes priority over ``no_confirm`` when the destination
    already exists. ``confirm`` is consulted at most once. ``on_transcode`` is
    called immediately before the transcoder runs, and only then.
    """
    source = job.source_path
    destination = job.destination_path

    mode = _mode_of(source)
    if mode is None or not stat.S_ISREG(mode):
        logger.info("Input file not found: %s", source)
        return DispatchResult(
            job=job, outcome=JobOutcome.FAILED, reason="input file not found"
        )
    input_size = _file_size(source)

    if not options.dry_run:
        _ensure_directory(destination.parent)

    if destination.exists():
        if options.skip_existing:
            logger.info("Skipping existing file %s", destination)
            return DispatchResult(
                job=job,
                outcome=JobOutcome.SKIPPED,
                input_size=input_size,
                reason="destination exists",
            )
        if not options.no_confirm:
            if not confirm(f"'{destination}' already exists. Overwrite it?"):
                logger.info("Overwrite declined for %s", destination)
                return DispatchResult(
                    job=job,
                    outcome=JobOutcome.SKIPPED,
                    input_size=input_size,
                    reason="overwrite declined",
                )
        logger.debug("Overwriting %s", destination)

    if options.dry_run:
        return DispatchResult(
            job=job, outcome=JobOutcome.WOULD_CONVERT, input_size=input_size
        )

    if on_transcode is not None:
        on_transcode(job)
    started = time.monotonic()
    result = transcoder.transcode(source, destination, job.mode)
    elapsed = time.monotonic() - started

    if not result.ok:
        logger.info(
            "Conversion failed for %s (exit status %s)", source, result.returncode
        )
        return DispatchResult(
            job=job,
            outcome=JobOutcome.FAILED,
            input_size=input_size,
            diagnostics=result.diagnostics,
            reason="transcoder failed",
        )

    logger.info("Converted %s -> %s in %.2fs", source, destination, elapsed)
    return DispatchResult(
        job=job,
        outcome=JobOutcome.PROCESSED,
        input_size=input_size,
        output_size=_file_size(destination),
        elapsed_seconds=elapsed,
    )


# -----------------------------
# Drivers
# -----------------------------
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
    """Use-case: collect, confirm and convert every audio file in a directory.

    Files are dispatched strictly sequentially in collection order. Per-file
    failures are recorded and never abort the batch; collection errors and
    an empty result propagate as exceptions before anything is converted.
    """
    try:
        config = DirectoryConversionConfig(
            directory=directory,
            output_dir=options.output_dir,
            recursive=options.recursive,
        )
    except ValidationError as exc:
        raise InvalidArgumentsError(f"Invalid directory conversion parameters: {exc}") from exc

    confirm = confirm or TyperConfirmer()

    files = collect_audio_files(config.directory, recursive=config.recursive)
    if not files:
        raise NoFilesFoundError(config.directory, supported_formats_label())
    logger.info("Found %d audio file(s) in %s", len(files), config.directory)
    if on_files_found is not None:
        on_files_found(files)

    if not options.dry_run and not confirm(BATCH_PROMPT):
        logger.info("Batch cancelled before dispatch")
        return BatchReport(
            results=(),
            statistics=RunStatistics(total=len(files)),
            cancelled=True,
        )

    transcoder = transcoder or FfmpegTranscoder()
    statistics = RunStatistics(total=len(files))
    results: list[DispatchResult] = []
    for index, job in enumerate(plan_jobs(files, options), start=1):
        if on_start is not None:
            on_start(index, statistics.total, job)
        result = dispatch_job(
            job,
            options,
            transcoder=transcoder,
            confirm=confirm,
            on_transcode=on_transcode,
        )
        statistics.record(result.outcome)
        results.append(result)
        if on_result is not None:
            on_result(index, statistics.total, result)

    logger.info(
        "Batch finished: %d processed, %d skipped, %d failed, %d previewed",
        statistics.processed,
        statistics.skipped,
        statistics.failed,
        statistics.previewed,
    )
    return BatchReport(
        results=tuple(results),
        statistics=statistics,
        dry_run=options.dry_run,
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
    """Use-case: convert one explicitly named file, bypassing collection.

    Raises
    ------
    PathNotFoundError
        If ``source_path`` is not an existing file.
    UnsupportedFormatError
        If the extension is outside the supported set.
    """
    try:
        config = FileConversionConfig(source_path=source_path, output_path=output_path)
    except ValidationError as exc:
        raise InvalidArgumentsError(f"Invalid file conversion parameters: {exc}") from exc

    mode = _mode_of(config.source_path)
    if mode is None or not stat.S_ISREG(mode):
        raise PathNotFoundError(config.source_path, "Input file")
    if not is_supported_audio(config.source_path):
        raise UnsupportedFormatError(
            f"Unsupported file format: '.{extension_of(config.source_path)}' "
            f"({config.source_path}). Supported formats: {supported_formats_label()}"
        )

    transcoder = transcoder or FfmpegTranscoder()
    confirm = confirm or TyperConfirmer()

    job = ConversionJob(
        source_path=config.source_path,
        destination_path=resolve_single_destination(
            config.source_path, config.output_path
        ),
        mode=options.mode,
    )
    statistics = RunStatistics(total=1)
    if on_start is not None:
        on_start(1, 1, job)
    result = dispatch_job(
        job,
        options,
        transcoder=transcoder,
        confirm=confirm,
        on_transcode=on_transcode,
    )
    statistics.record(result.outcome)
    if on_result is not None:
        on_result(1, 1, result)
    return BatchReport(
        results=(result,),
        statistics=statistics,
        dry_run=options.dry_run,
        single_file=True,
    )
