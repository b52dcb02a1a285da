"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CliSelection(BaseModel):
    """Validated choice between single-file and directory mode."""

    model_config = ConfigDict(extra="forbid")

    file: Path | None = None
    directory: Path | None = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> CliSelection:
        if self.file is None and self.directory is None:
            raise ValueError(
                "No input file or directory provided. "
                "Use --file for a single file or --directory for a directory."
            )
        if self.file is not None and self.directory is not None:
            raise ValueError("--file and --directory are mutually exclusive.")
        return self


class FileConversionConfig(BaseModel):
    """Validated input for single-file conversion."""

    model_config = ConfigDict(extra="forbid")

    source_path: Path
    output_path: Path | None = None


class DirectoryConversionConfig(BaseModel):
    """Validated input for directory conversion."""

    model_config = ConfigDict(extra="forbid")

    directory: Path
    output_dir: Path | None = None
    recursive: bool = False


class TranscoderConfig(BaseModel):
    """Validated settings for the ffmpeg adapter."""

    model_config = ConfigDict(extra="forbid")

    binary: str = Field(default="ffmpeg", min_length=1)
    timeout: float | None = Field(default=None, gt=0.0)
