"""Application-layer job, result and statistics objects."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from audio2mp3.application.options import TranscodeMode
from audio2mp3.errors import ConversionFailedError


class JobOutcome(StrEnum):
    """Terminal disposition of one conversion job."""

    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"
    WOULD_CONVERT = "would_convert"


@dataclass(frozen=True)
class ConversionJob:
    """One source file scheduled for conversion to one destination."""

    source_path: Path
    destination_path: Path
    mode: TranscodeMode = TranscodeMode.REENCODE


@dataclass(frozen=True)
class TranscodeResult:
    """Outcome reported by a transcoder invocation."""

    ok: bool
    returncode: int | None = None
    diagnostics: str = ""


@dataclass(frozen=True)
class DispatchResult:
    """Structured outcome of dispatching a single job."""

    job: ConversionJob
    outcome: JobOutcome
    input_size: int = 0
    output_size: int | None = None
    elapsed_seconds: float | None = None
    diagnostics: str = ""
    reason: str = ""


@dataclass
class RunStatistics:
    """Counters accumulated by the batch driver.

    ``previewed`` counts dry-run ``would_convert`` outcomes so that every
    discovered file lands in exactly one counter.
    """

    total: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    previewed: int = 0
    started_at: float = field(default_factory=time.monotonic)

    @property
    def settled(self) -> int:
        """Number of files that reached a terminal disposition."""
        return self.processed + self.skipped + self.failed + self.previewed

    def record(self, outcome: JobOutcome) -> None:
        """Count one outcome, keeping ``settled <= total``."""
        if self.settled >= self.total:
            raise ValueError(
                f"cannot record outcome {outcome.value!r}: all {self.total} "
                "file(s) already settled"
            )
        if outcome is JobOutcome.PROCESSED:
            self.processed += 1
        elif outcome is JobOutcome.SKIPPED:
            self.skipped += 1
        elif outcome is JobOutcome.FAILED:
            self.failed += 1
        else:
            self.previewed += 1

    def elapsed(self) -> float:
        """Seconds since the run started."""
        return time.monotonic() - self.started_at

    def exit_code(self, dry_run: bool) -> int:
        """Process exit code for the finished run.

        Non-zero if any file failed, or if nothing was processed outside a
        dry run.
        """
        if self.failed > 0:
            return 1
        if self.processed == 0 and not dry_run:
            return 1
        return 0


@dataclass(frozen=True)
class BatchReport:
    """Everything a finished run produced, in dispatch order."""

    results: tuple[DispatchResult, ...]
    statistics: RunStatistics
    dry_run: bool = False
    cancelled: bool = False
    single_file: bool = False

    @property
    def exit_code(self) -> int:
        """Exit code for the run.

        A cancelled batch exits cleanly. A single file that was skipped
        (declined overwrite, existing output) is not an error.
        """
        if self.cancelled:
            return 0
        if self.single_file:
            return 1 if self.statistics.failed else 0
        return self.statistics.exit_code(self.dry_run)

    def failures(self) -> tuple[DispatchResult, ...]:
        """Results whose outcome is ``failed``."""
        return tuple(r for r in self.results if r.outcome is JobOutcome.FAILED)

    def raise_for_status(self) -> None:
        """Raise ``ConversionFailedError`` naming each failed source."""
        failed = self.failures()
        if not failed:
            return
        names = ", ".join(str(r.job.source_path) for r in failed)
        raise ConversionFailedError(
            f"{len(failed)} of {self.statistics.total} conversion(s) failed: {names}"
        )
