"""Exception hierarchy shared by the CLI, API and application layers."""

from __future__ import annotations

from pathlib import Path


class Audio2Mp3Error(Exception):
    """Base error for all audio2mp3 failures.

    Every subclass carries the process ``exit_code`` the CLI reports for it.
    """

    exit_code: int = 1


class InvalidArgumentsError(Audio2Mp3Error):
    """Bad or missing command-line arguments."""

    exit_code = 1


class MissingDependencyError(Audio2Mp3Error):
    """The external transcoder binary could not be found."""

    exit_code = 2


class PathNotFoundError(Audio2Mp3Error):
    """An input file or directory does not exist."""

    exit_code = 3

    def __init__(self, path: Path, what: str = "Path") -> None:
        super().__init__(f"{what} not found: '{path}'")
        self.path = path


class AccessDeniedError(Audio2Mp3Error):
    """A file or directory could not be read or written."""

    exit_code = 3

    def __init__(
        self, path: Path, detail: str | None = None, reason: str = "Permission denied"
    ) -> None:
        message = f"{reason}: '{path}'"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.path = path


class UnsupportedFormatError(Audio2Mp3Error):
    """A single input file has an extension outside the supported set."""

    exit_code = 1


class ConversionFailedError(Audio2Mp3Error):
    """One or more conversions failed."""

    exit_code = 1


class NoFilesFoundError(Audio2Mp3Error):
    """Directory mode found nothing to convert."""

    exit_code = 1

    def __init__(self, directory: Path, formats: str) -> None:
        super().__init__(
            f"No supported audio files found in '{directory}'. "
            f"Supported formats: {formats}"
        )
        self.directory = directory
