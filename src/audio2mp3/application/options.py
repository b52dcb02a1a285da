"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class TranscodeMode(StrEnum):
    """How the external tool produces the MP3 stream."""

    REENCODE = "reencode"
    COPY = "copy"


@dataclass(frozen=True)
class ConversionOptions:
    """Shared conversion options passed through use-cases."""

    copy_mode: bool = False
    skip_existing: bool = False
    no_confirm: bool = False
    dry_run: bool = False
    recursive: bool = False
    output_dir: Path | None = None

    @property
    def mode(self) -> TranscodeMode:
        """Transcode mode selected by ``copy_mode``."""
        return TranscodeMode.COPY if self.copy_mode else TranscodeMode.REENCODE
