"""Interactive confirmation adapter backed by Typer prompts."""

from __future__ import annotations

import typer


class TyperConfirmer:
    """Ask yes/no questions on the terminal."""

    def __init__(self, default: bool = False) -> None:
        self.default = default

    def __call__(self, prompt: str) -> bool:
        """Prompt once and return the answer."""
        return typer.confirm(prompt, default=self.default)
