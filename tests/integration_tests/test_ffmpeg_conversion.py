"""Integration tests running the real ffmpeg binary."""

from __future__ import annotations

import shutil
import subprocess
import wave
from pathlib import Path

import pytest

from audio2mp3.adapters.transcoders import FfmpegTranscoder
from audio2mp3.application.results import JobOutcome
from audio2mp3.application.use_cases import build_conversion_options, run_batch


def _has_mp3_encoder() -> bool:
    binary = shutil.which("ffmpeg")
    if binary is None:
        return False
    encoders = subprocess.run(
        [binary, "-hide_banner", "-encoders"], capture_output=True, text=True, check=False
    )
    return "libmp3lame" in encoders.stdout


pytestmark = pytest.mark.skipif(
    not _has_mp3_encoder(), reason="ffmpeg with libmp3lame is not available"
)


def _write_silence(path: Path, seconds: float = 0.25, rate: int = 8000) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as handle:
        handle.setnchannels(1)
        handle.setsampwidth(2)
        handle.setframerate(rate)
        handle.writeframes(b"\x00\x00" * int(seconds * rate))


def test_reencode_directory_with_real_ffmpeg(tmp_path: Path) -> None:
    """WAV files are re-encoded into non-empty MP3s."""
    _write_silence(tmp_path / "a.wav")
    _write_silence(tmp_path / "sub" / "b.wav")

    report = run_batch(
        directory=tmp_path,
        options=build_conversion_options(recursive=True),
        transcoder=FfmpegTranscoder(timeout=60),
        confirm=lambda _prompt: True,
    )

    assert report.exit_code == 0
    assert report.statistics.processed == 2
    for result in report.results:
        assert result.job.destination_path.stat().st_size > 0


def test_stream_copy_of_pcm_into_mp3_fails_with_diagnostics(tmp_path: Path) -> None:
    """PCM cannot be stream-copied into MP3; ffmpeg's error is kept."""
    _write_silence(tmp_path / "a.wav")

    report = run_batch(
        directory=tmp_path,
        options=build_conversion_options(copy_mode=True),
        transcoder=FfmpegTranscoder(timeout=60),
        confirm=lambda _prompt: True,
    )

    (result,) = report.results
    assert result.outcome is JobOutcome.FAILED
    assert result.diagnostics.strip()
    assert report.exit_code == 1
