"""Unit tests for run statistics and batch reports."""

from __future__ import annotations

from pathlib import Path

import pytest

from audio2mp3.application.results import (
    BatchReport,
    ConversionJob,
    DispatchResult,
    JobOutcome,
    RunStatistics,
)
from audio2mp3.errors import ConversionFailedError


def test_record_counts_each_outcome() -> None:
    """Each outcome increments exactly one counter."""
    stats = RunStatistics(total=4)
    for outcome in JobOutcome:
        stats.record(outcome)

    assert (stats.processed, stats.skipped, stats.failed, stats.previewed) == (1, 1, 1, 1)
    assert stats.settled == stats.total


def test_record_refuses_to_exceed_total() -> None:
    """settled can never exceed total."""
    stats = RunStatistics(total=1)
    stats.record(JobOutcome.PROCESSED)

    with pytest.raises(ValueError, match="already settled"):
        stats.record(JobOutcome.SKIPPED)


@pytest.mark.parametrize(
    ("processed", "skipped", "failed", "dry_run", "expected"),
    [
        (2, 0, 1, False, 1),
        (3, 0, 0, False, 0),
        (0, 3, 0, False, 1),
        (0, 0, 0, True, 0),
        (0, 2, 0, True, 0),
        (0, 0, 1, True, 1),
    ],
)
def test_exit_code_policy(
    processed: int, skipped: int, failed: int, dry_run: bool, expected: int
) -> None:
    """Failures or nothing processed (outside dry run) exit non-zero."""
    stats = RunStatistics(total=3, processed=processed, skipped=skipped, failed=failed)

    assert stats.exit_code(dry_run) == expected


def test_raise_for_status_names_failed_sources() -> None:
    """Failed sources are listed in the aggregated error."""
    job = ConversionJob(Path("a.wav"), Path("a.mp3"))
    ok = ConversionJob(Path("b.wav"), Path("b.mp3"))
    report = BatchReport(
        results=(
            DispatchResult(job=job, outcome=JobOutcome.FAILED),
            DispatchResult(job=ok, outcome=JobOutcome.PROCESSED),
        ),
        statistics=RunStatistics(total=2, processed=1, failed=1),
    )

    with pytest.raises(ConversionFailedError, match=r"1 of 2 conversion\(s\) failed: a.wav"):
        report.raise_for_status()


def test_raise_for_status_is_silent_without_failures() -> None:
    """Clean reports do not raise."""
    BatchReport(results=(), statistics=RunStatistics(total=0), dry_run=True).raise_for_status()


def test_cancelled_report_exits_zero() -> None:
    """Cancelling at the batch prompt is a clean exit."""
    report = BatchReport(results=(), statistics=RunStatistics(total=3), cancelled=True)

    assert report.exit_code == 0
