"""Shared pytest configuration, marker assignment and port fakes."""

from __future__ import annotations

from pathlib import Path

import pytest

from audio2mp3.application.options import TranscodeMode
from audio2mp3.application.results import TranscodeResult


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


class FakeTranscoder:
    """Record transcode calls and write a stub MP3 on success."""

    binary = "/usr/bin/ffmpeg"

    def __init__(self, fail_on: set[str] | None = None, payload: bytes = b"ID3stub") -> None:
        self.fail_on = fail_on or set()
        self.payload = payload
        self.calls: list[tuple[Path, Path, TranscodeMode]] = []

    def transcode(
        self, source: Path, destination: Path, mode: TranscodeMode
    ) -> TranscodeResult:
        self.calls.append((source, destination, mode))
        if source.name in self.fail_on:
            return TranscodeResult(
                ok=False,
                returncode=1,
                diagnostics=f"{source}: Invalid data found when processing input\n",
            )
        destination.write_bytes(self.payload)
        return TranscodeResult(ok=True, returncode=0)


class ScriptedConfirmer:
    """Answer prompts from a fixed script; fail on unexpected prompts."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {prompt}")
        return self.answers.pop(0)


@pytest.fixture
def make_transcoder() -> type[FakeTranscoder]:
    """Factory for fake transcoders."""
    return FakeTranscoder


@pytest.fixture
def make_confirmer() -> type[ScriptedConfirmer]:
    """Factory for scripted confirmers."""
    return ScriptedConfirmer


@pytest.fixture
def write_files():
    """Create files (with parent directories) relative to a root."""

    def _write(root: Path, *names: str) -> list[Path]:
        created = []
        for name in names:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"RIFF" + name.encode())
            created.append(path)
        return created

    return _write
