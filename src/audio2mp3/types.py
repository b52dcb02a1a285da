"""Shared type aliases for presentation hooks."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from audio2mp3.application.results import ConversionJob, DispatchResult

type FilesFoundHook = Callable[[Sequence[Path]], None]
type ResultHook = Callable[[int, int, "DispatchResult"], None]
type JobStartHook = Callable[[int, int, "ConversionJob"], None]
type TranscodeStartHook = Callable[["ConversionJob"], None]
