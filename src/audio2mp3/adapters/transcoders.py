"""ffmpeg-backed transcoder implementing the application port."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

from pydantic import ValidationError

from audio2mp3.application.options import TranscodeMode
from audio2mp3.application.results import TranscodeResult
from audio2mp3.errors import InvalidArgumentsError, MissingDependencyError
from audio2mp3.schemas import TranscoderConfig

logger = logging.getLogger(__name__)

INSTALL_HINT = (
    "Please install FFmpeg:\n"
    "  Ubuntu/Debian: sudo apt install ffmpeg\n"
    "  macOS: brew install ffmpeg\n"
    "  Windows: download from https://ffmpeg.org/download.html"
)

# Carry the first audio stream's metadata block into the output.
METADATA_MAP = "0:s:a:0"
# LAME VBR quality 0 is the highest-quality variable bitrate setting.
VBR_QUALITY = "0"


def locate_ffmpeg(binary: str = "ffmpeg") -> str:
    """Resolve the ffmpeg executable.

    Parameters
    ----------
    binary : str, default="ffmpeg"
        Executable name looked up on ``PATH``, or an explicit path.

    Returns
    -------
    str
        Absolute path to the executable.

    Raises
    ------
    MissingDependencyError
        If the executable cannot be found.
    """
    resolved = shutil.which(binary)
    if resolved is None:
        raise MissingDependencyError(
            f"FFmpeg is not installed or not in PATH (looked for '{binary}').\n"
            f"{INSTALL_HINT}"
        )
    return resolved


def ffmpeg_version(binary: str) -> str:
    """Return the version token from ``ffmpeg -version``, or ``"unknown"``."""
    try:
        completed = subprocess.run(
            [binary, "-version"],
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError:
        return "unknown"
    lines = completed.stdout.splitlines()
    parts = lines[0].split() if lines else []
    # "ffmpeg version 6.1.1-3ubuntu5 Copyright ..."
    return parts[2] if len(parts) >= 3 else "unknown"


def build_ffmpeg_command(
    binary: str,
    source: Path,
    destination: Path,
    mode: TranscodeMode,
) -> list[str]:
    """Build the ffmpeg argument vector for one conversion.

    Both modes overwrite ``destination`` (``-y``); conflict handling happens
    before the tool is invoked. ``-nostdin`` keeps ffmpeg from consuming the
    terminal input used for prompts.
    """
    cmd = [
        binary,
        "-hide_banner",
        "-nostdin",
        "-loglevel",
        "error",
        "-i",
        str(source),
        "-map_metadata",
        METADATA_MAP,
    ]
    if mode is TranscodeMode.COPY:
        cmd.extend(["-acodec", "copy"])
    else:
        cmd.extend(["-codec:a", "libmp3lame", "-q:a", VBR_QUALITY])
    cmd.extend(["-y", str(destination)])
    return cmd


class FfmpegTranscoder:
    """Transcode audio to MP3 by running ffmpeg as a subprocess."""

    def __init__(self, binary: str = "ffmpeg", timeout: float | None = None) -> None:
        try:
            config = TranscoderConfig(binary=binary, timeout=timeout)
        except ValidationError as exc:
            raise InvalidArgumentsError(f"Invalid transcoder settings: {exc}") from exc
        self.binary = locate_ffmpeg(config.binary)
        self.timeout = config.timeout

    def transcode(
        self,
        source: Path,
        destination: Path,
        mode: TranscodeMode,
    ) -> TranscodeResult:
        """Run ffmpeg for one file.

        Parameters
        ----------
        source : Path
            Input audio file.
        destination : Path
            Output MP3 path; overwritten if present.
        mode : TranscodeMode
            Stream copy or full re-encode.

        Returns
        -------
        TranscodeResult
            ``ok`` is ``False`` on a non-zero exit status, a timeout or a
            launch failure; ``diagnostics`` holds ffmpeg's stderr unchanged.
        """
        cmd = build_ffmpeg_command(self.binary, source, destination, mode)
        logger.debug("cmd: %s", shlex.join(cmd))
        try:
            completed = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.info("ffmpeg timed out after %ss for %s", self.timeout, source)
            return TranscodeResult(
                ok=False, diagnostics=f"ffmpeg timed out after {self.timeout}s"
            )
        except OSError as exc:
            logger.info("Could not run ffmpeg for %s: %s", source, exc)
            return TranscodeResult(ok=False, diagnostics=str(exc))

        if completed.returncode != 0:
            logger.debug(
                "ffmpeg exited %d for %s", completed.returncode, source.name
            )
            return TranscodeResult(
                ok=False,
                returncode=completed.returncode,
                diagnostics=completed.stderr,
            )
        return TranscodeResult(
            ok=True, returncode=completed.returncode, diagnostics=completed.stderr
        )
