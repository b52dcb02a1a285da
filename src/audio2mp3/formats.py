"""Supported input formats and the extension matcher."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class SupportedExtension(StrEnum):
    """Audio container extensions accepted as conversion input."""

    WAV = "wav"
    FLAC = "flac"
    OGG = "ogg"
    AAC = "aac"
    M4A = "m4a"
    ALAC = "alac"
    AIFF = "aiff"
    OPUS = "opus"


_SUPPORTED = frozenset(ext.value for ext in SupportedExtension)

OUTPUT_SUFFIX = ".mp3"


def extension_of(name: str | Path) -> str:
    """Return the lower-cased text after the last ``.`` of a file name.

    Parameters
    ----------
    name : str | Path
        File name or path. Only the final path component is inspected.

    Returns
    -------
    str
        Extension without the dot, or ``""`` when the name has none.
    """
    base = Path(name).name
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[1].lower()


def is_supported_audio(name: str | Path) -> bool:
    """Return whether ``name`` has a supported audio extension."""
    return extension_of(name) in _SUPPORTED


def supported_formats_label() -> str:
    """Human-readable list of supported formats, e.g. ``WAV, FLAC, ...``."""
    return ", ".join(ext.value.upper() for ext in SupportedExtension)


def mp3_name_for(source: Path) -> str:
    """Output file name for ``source``: same stem, ``.mp3`` extension."""
    base = source.name
    stem = base.rsplit(".", 1)[0] if "." in base else base
    return f"{stem}{OUTPUT_SUFFIX}"
