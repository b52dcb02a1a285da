"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from audio2mp3.application.options import TranscodeMode
from audio2mp3.application.results import TranscodeResult


class Transcoder(Protocol):
    """Turn one audio file into an MP3 using an external tool."""

    def transcode(
        self,
        source: Path,
        destination: Path,
        mode: TranscodeMode,
    ) -> TranscodeResult:
        """Write ``destination`` from ``source``, overwriting unconditionally."""


class Confirmer(Protocol):
    """Ask the user a yes/no question."""

    def __call__(self, prompt: str) -> bool:
        """Return ``True`` on a positive answer."""
