#!/usr/bin/env python3
"""
audio2mp3.cli.cli

Typer-based CLI for converting audio files to MP3 with ffmpeg.

Supported input formats: WAV, FLAC, OGG, AAC, M4A, ALAC, AIFF and OPUS.

Examples
--------
Convert a single file next to the original:

    audio2mp3 -f song.flac

Convert a single file to a specific location:

    audio2mp3 -f song.flac -o /path/to/output.mp3

Recursively convert a directory with copy mode, skipping existing outputs:

    audio2mp3 -d /path/to/music -r -c -s

Preview what would be processed:

    audio2mp3 -d /path/to/music --dry-run

Exit codes: 0 success, 1 invalid arguments / failed or no conversions,
2 ffmpeg missing, 3 file or directory access problems.
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Sequence
from pathlib import Path

import click
import typer
from pydantic import ValidationError

from audio2mp3 import __version__
from audio2mp3.adapters.prompts import TyperConfirmer
from audio2mp3.adapters.transcoders import FfmpegTranscoder, ffmpeg_version
from audio2mp3.application.results import (
    BatchReport,
    ConversionJob,
    DispatchResult,
    JobOutcome,
)
from audio2mp3.errors import Audio2Mp3Error, InvalidArgumentsError
from audio2mp3.schemas import CliSelection
from audio2mp3.types import ResultHook, TranscodeStartHook

app = typer.Typer(
    name="audio2mp3",
    help="Convert single or multiple audio files to MP3 using FFmpeg.",
    add_completion=False,
)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

OUTPUT_HELP = "Output file (with --file) or output directory (with --directory)."

_SYMBOLS = {
    JobOutcome.PROCESSED: ("✓", "magenta"),
    JobOutcome.SKIPPED: ("↷", "yellow"),
    JobOutcome.FAILED: ("✗", "red"),
    JobOutcome.WOULD_CONVERT: ("◎", "cyan"),
}


# -----------------------------
# Presentation helpers
# -----------------------------
def _format_size(size: int) -> str:
    """Render a byte count with a whole-number B/KB/MB/GB unit."""
    if size < 1024:
        return f"{size}B"
    if size < 1024**2:
        return f"{size // 1024}KB"
    if size < 1024**3:
        return f"{size // 1024**2}MB"
    return f"{size // 1024**3}GB"


def _size_of(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def _progress_bar(current: int, total: int, width: int = 40) -> str:
    filled = current * width // total
    bar = "█" * filled + "░" * (width - filled)
    return f"[{bar}] {current * 100 // total}% ({current}/{total})"


def _show_file_list(files: Sequence[Path]) -> None:
    """Print the numbered list of discovered files with their sizes."""
    typer.secho(f"Found {len(files)} audio file(s):", fg="green")
    for index, path in enumerate(files, start=1):
        typer.echo(f"  {index:3d}. {path.name:<60} {'(' + _format_size(_size_of(path)) + ')':>10}")
    typer.echo()


def _describe(result: DispatchResult, copy_mode: bool) -> str:
    job = result.job
    source = job.source_path.name
    destination = job.destination_path.name
    size = _format_size(result.input_size)
    if result.outcome is JobOutcome.PROCESSED:
        verb = "Copied" if copy_mode else "Converted"
        return (
            f"{verb} '{source}' → '{destination}' ({size}) in "
            f"{result.elapsed_seconds or 0.0:.1f}s • Output: "
            f"{_format_size(result.output_size or 0)}"
        )
    if result.outcome is JobOutcome.SKIPPED:
        return f"Skipped '{source}' ({result.reason})"
    if result.outcome is JobOutcome.WOULD_CONVERT:
        verb = "copy" if copy_mode else "convert"
        return f"Would {verb} '{source}' → '{destination}' ({size})"
    return f"Failed to convert '{job.source_path}' ({result.reason})"


def _show_start(index: int, total: int, job: ConversionJob) -> None:
    """Print the batch progress bar before a job is dispatched."""
    del job
    if total > 1:
        typer.echo(_progress_bar(index, total))


def _transcode_printer(copy_mode: bool) -> TranscodeStartHook:
    """Build the hook announcing the file ffmpeg is about to work on."""
    verb = "Copying" if copy_mode else "Converting"

    def _show_transcode(job: ConversionJob) -> None:
        typer.secho(
            f"[⚙] {verb} '{job.source_path.name}' → '{job.destination_path.name}' "
            f"({_format_size(_size_of(job.source_path))})",
            fg="green",
        )

    return _show_transcode


def _result_printer(copy_mode: bool) -> ResultHook:
    """Build the per-file outcome hook passed to the use-cases."""

    def _show_result(index: int, total: int, result: DispatchResult) -> None:
        del index, total
        symbol, colour = _SYMBOLS[result.outcome]
        failed = result.outcome is JobOutcome.FAILED
        typer.secho(f"[{symbol}] {_describe(result, copy_mode)}", fg=colour, err=failed)
        if failed and result.diagnostics:
            # ffmpeg output is passed through unchanged.
            typer.echo(result.diagnostics.rstrip(), err=True)

    return _show_result


def _show_summary(report: BatchReport) -> None:
    """Print the run summary block."""
    stats = report.statistics
    typer.echo()
    typer.secho("CONVERSION SUMMARY", bold=True)
    typer.echo(f"  Total files found:      {stats.total}")
    typer.echo(f"  Successfully processed: {stats.processed}")
    typer.echo(f"  Skipped files:          {stats.skipped}")
    typer.echo(f"  Failed conversions:     {stats.failed}")
    typer.echo(f"  Total time:             {stats.elapsed():.0f}s")
    if report.dry_run:
        typer.secho("  DRY RUN MODE - No files were actually converted", fg="magenta")
    typer.echo()


def _finish(report: BatchReport, debug: bool) -> int:
    """Print the closing line and return the process exit code."""
    if report.cancelled:
        typer.secho("✗ Operation cancelled.", fg="red")
        return 0
    try:
        report.raise_for_status()
    except Audio2Mp3Error as exc:
        _print_conversion_error(exc, debug)
        typer.echo("Some conversions failed. Check the output above for details.", err=True)
        return report.exit_code
    if report.exit_code:
        typer.secho("! No files were processed.", fg="yellow")
    elif report.dry_run:
        typer.secho(
            "Dry run completed. Use without --dry-run to perform actual conversions.",
            fg="cyan",
        )
    elif report.statistics.processed:
        typer.secho("✓ All conversions completed successfully!", fg="green")
    return report.exit_code


# -----------------------------
# Error / environment utilities
# -----------------------------
def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg="red", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _selection_error(exc: ValidationError) -> InvalidArgumentsError:
    """Turn a pydantic validation failure into a user-facing argument error."""
    messages = [str(err.get("msg", "")).removeprefix("Value error, ") for err in exc.errors()]
    return InvalidArgumentsError("; ".join(m for m in messages if m) or str(exc))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
    )


def _prepare_transcoder(ffmpeg: str, timeout: float | None) -> FfmpegTranscoder:
    """Locate ffmpeg and report its version."""
    typer.secho("[+] Checking prerequisites...", dim=True)
    transcoder = FfmpegTranscoder(ffmpeg, timeout=timeout)
    typer.secho(f"[✓] FFmpeg found: {ffmpeg_version(transcoder.binary)}", fg="green")
    return transcoder


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"audio2mp3 {__version__}")
        raise typer.Exit()


# -----------------------------
# Command
# -----------------------------
@app.command(context_settings=CONTEXT_SETTINGS)
def convert(
    file: Path | None = typer.Option(
        None, "-f", "--file", help="Convert a single file."
    ),
    output: Path | None = typer.Option(None, "-o", "--output", help=OUTPUT_HELP),
    directory: Path | None = typer.Option(
        None,
        "-d",
        "--directory",
        help="Convert all supported files in a directory.",
    ),
    recursive: bool = typer.Option(
        False, "-r", "--recursive", help="Process directories recursively."
    ),
    copy: bool = typer.Option(
        False,
        "-c",
        "--copy",
        help="Convert without re-encoding if possible (faster, same quality).",
    ),
    skip_existing: bool = typer.Option(
        False, "-s", "--skip-existing", help="Skip existing files without prompt."
    ),
    no_confirm: bool = typer.Option(
        False,
        "-nc",
        "--no-confirm",
        help="Automatically overwrite existing files without asking.",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be processed without converting."
    ),
    ffmpeg: str = typer.Option(
        "ffmpeg",
        "--ffmpeg",
        envvar="AUDIO2MP3_FFMPEG",
        help="ffmpeg executable name or path.",
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", min=0.001, help="Per-file ffmpeg timeout in seconds."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging."),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Convert audio files (WAV, FLAC, OGG, AAC, M4A, ALAC, AIFF, OPUS) to MP3.

    Provide either --file for a single file or --directory for a batch. Output
    is written next to each input unless --output is given.
    """
    del version
    _configure_logging(verbose)

    try:
        selection = CliSelection(file=file, directory=directory)
    except ValidationError as exc:
        raise typer.Exit(code=_print_conversion_error(_selection_error(exc), debug))

    try:
        transcoder = _prepare_transcoder(ffmpeg, timeout)
        typer.echo()
        show_result = _result_printer(copy)
        show_transcode = _transcode_printer(copy)

        if selection.directory is not None:
            from audio2mp3.api import convert_directory_to_mp3

            mode = "recursively " if recursive else ""
            typer.secho(f"[🔍] Searching {mode}in '{selection.directory}'...", fg="blue")
            report = convert_directory_to_mp3(
                directory=selection.directory,
                output_dir=output,
                recursive=recursive,
                copy_mode=copy,
                skip_existing=skip_existing,
                no_confirm=no_confirm,
                dry_run=dry_run,
                transcoder=transcoder,
                confirm=TyperConfirmer(),
                on_files_found=_show_file_list,
                on_start=_show_start,
                on_transcode=show_transcode,
                on_result=show_result,
            )
            if not report.cancelled:
                _show_summary(report)
        else:
            from audio2mp3.api import convert_file_to_mp3

            assert selection.file is not None
            report = convert_file_to_mp3(
                source_path=selection.file,
                output_path=output,
                copy_mode=copy,
                skip_existing=skip_existing,
                no_confirm=no_confirm,
                dry_run=dry_run,
                transcoder=transcoder,
                confirm=TyperConfirmer(),
                on_transcode=show_transcode,
                on_result=show_result,
            )
    except Audio2Mp3Error as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except click.Abort:
        raise
    except KeyboardInterrupt:
        typer.secho("\n✗ Interrupted.", fg="red", err=True)
        raise typer.Exit(code=130)
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    code = _finish(report, debug)
    if code:
        raise typer.Exit(code=code)


def main(argv: Sequence[str] | None = None) -> int:
    """Console-script entry point.

    Runs the Typer app outside standalone mode so click usage errors (unknown
    option, missing option value) exit with the argument-error code 1 instead
    of click's default 2, which is reserved for a missing ffmpeg.
    """
    command = typer.main.get_command(app)
    try:
        code = command.main(
            args=list(argv) if argv is not None else None,
            prog_name="audio2mp3",
            standalone_mode=False,
        )
    except click.UsageError as exc:
        exc.show()
        return InvalidArgumentsError.exit_code
    except click.Abort:
        typer.echo("Aborted!", err=True)
        return 1
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
