#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/audio2mp3"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    # Only adapters may talk to processes; only adapters and the CLI may prompt.
    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "import typer",
                "from typer",
                "import click",
                "import subprocess",
                "input(",
            ],
        )

    for name in ("formats.py", "errors.py", "schemas.py", "types.py"):
        _assert_no_imports(
            PACKAGE / name,
            ["import typer", "import subprocess", "audio2mp3.cli"],
        )

    _assert_no_imports(PACKAGE / "cli/cli.py", ["import subprocess"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
