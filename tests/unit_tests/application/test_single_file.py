"""Unit tests for single-file mode."""

from __future__ import annotations

from pathlib import Path

import pytest

from audio2mp3.application.results import JobOutcome
from audio2mp3.application.use_cases import (
    build_conversion_options,
    convert_single_file,
    resolve_single_destination,
)
from audio2mp3.errors import AccessDeniedError, PathNotFoundError, UnsupportedFormatError


def test_missing_file_is_not_found_and_writes_nothing(
    tmp_path: Path, make_transcoder, make_confirmer
) -> None:
    """missing.wav fails with exit code 3 before any filesystem write."""
    transcoder = make_transcoder()

    with pytest.raises(PathNotFoundError) as excinfo:
        convert_single_file(
            source_path=tmp_path / "missing.wav",
            options=build_conversion_options(),
            transcoder=transcoder,
            confirm=make_confirmer(),
        )

    assert excinfo.value.exit_code == 3
    assert "missing.wav" in str(excinfo.value)
    assert list(tmp_path.iterdir()) == []
    assert transcoder.calls == []


def test_unsupported_extension_fails_fast(
    tmp_path: Path, write_files, make_transcoder, make_confirmer
) -> None:
    """Unsupported files are rejected before conversion."""
    (source,) = write_files(tmp_path, "notes.txt")
    transcoder = make_transcoder()

    with pytest.raises(UnsupportedFormatError) as excinfo:
        convert_single_file(
            source_path=source,
            options=build_conversion_options(),
            transcoder=transcoder,
            confirm=make_confirmer(),
        )

    assert excinfo.value.exit_code == 1
    assert ".txt" in str(excinfo.value)
    assert transcoder.calls == []


def test_single_file_converts_beside_source(
    tmp_path: Path, write_files, make_transcoder, make_confirmer
) -> None:
    """Default output sits next to the input with an .mp3 extension."""
    (source,) = write_files(tmp_path, "song.flac")

    report = convert_single_file(
        source_path=source,
        options=build_conversion_options(),
        transcoder=make_transcoder(),
        confirm=make_confirmer(),
    )

    assert report.results[0].outcome is JobOutcome.PROCESSED
    assert (tmp_path / "song.mp3").is_file()
    assert report.exit_code == 0


def test_single_file_failure_exits_one(
    tmp_path: Path, write_files, make_transcoder, make_confirmer
) -> None:
    """A failed single conversion yields exit code 1."""
    (source,) = write_files(tmp_path, "song.flac")

    report = convert_single_file(
        source_path=source,
        options=build_conversion_options(),
        transcoder=make_transcoder(fail_on={"song.flac"}),
        confirm=make_confirmer(),
    )

    assert report.statistics.failed == 1
    assert report.exit_code == 1


def test_single_file_declined_overwrite_exits_zero(
    tmp_path: Path, write_files, make_transcoder, make_confirmer
) -> None:
    """Keeping an existing output is not an error for a single file."""
    (source, _existing) = write_files(tmp_path, "song.flac", "song.mp3")

    report = convert_single_file(
        source_path=source,
        options=build_conversion_options(),
        transcoder=make_transcoder(),
        confirm=make_confirmer(False),
    )

    assert report.statistics.skipped == 1
    assert report.exit_code == 0


def test_resolve_single_destination_variants(tmp_path: Path) -> None:
    """Output may be an explicit .mp3 file or a directory."""
    source = tmp_path / "in" / "song.flac"
    existing_dir = tmp_path / "odd.mp3"
    existing_dir.mkdir()

    assert resolve_single_destination(source, None) == tmp_path / "in" / "song.mp3"
    assert resolve_single_destination(source, tmp_path / "x.MP3") == tmp_path / "x.MP3"
    assert resolve_single_destination(source, tmp_path / "out") == tmp_path / "out" / "song.mp3"
    assert resolve_single_destination(source, existing_dir) == existing_dir / "song.mp3"


def test_unreadable_source_status_is_access_error(
    tmp_path: Path, write_files, make_transcoder, make_confirmer, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A source that cannot be stat'ed exits 3 rather than crashing."""
    (source,) = write_files(tmp_path, "locked/song.flac")
    original_stat = Path.stat

    def guarded_stat(self: Path, *, follow_symlinks: bool = True):
        if self == source:
            raise PermissionError(13, "Permission denied", str(self))
        return original_stat(self, follow_symlinks=follow_symlinks)

    monkeypatch.setattr(Path, "stat", guarded_stat)
    transcoder = make_transcoder()

    with pytest.raises(AccessDeniedError) as excinfo:
        convert_single_file(
            source_path=source,
            options=build_conversion_options(),
            transcoder=transcoder,
            confirm=make_confirmer(),
        )

    assert excinfo.value.exit_code == 3
    assert "song.flac" in str(excinfo.value)
    assert transcoder.calls == []


def test_start_hooks_announce_the_job(
    tmp_path: Path, write_files, make_transcoder, make_confirmer
) -> None:
    """Single-file runs report the job before and during conversion."""
    (source,) = write_files(tmp_path, "song.flac")
    events: list[tuple[str, object]] = []

    convert_single_file(
        source_path=source,
        options=build_conversion_options(),
        transcoder=make_transcoder(),
        confirm=make_confirmer(),
        on_start=lambda index, total, job: events.append(("start", (index, total))),
        on_transcode=lambda job: events.append(("transcode", job.source_path)),
    )

    assert events == [("start", (1, 1)), ("transcode", source)]
