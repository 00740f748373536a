"""Tone Picker backend - rewrite text along formality and friendliness axes."""

from pathlib import Path


def _read_version() -> str:
    """Read version from the VERSION file at repository root."""
    version_file = Path(__file__).parent.parent / "VERSION"
    try:
        return version_file.read_text().strip()
    except FileNotFoundError:
        return "0.0.0"


__version__ = _read_version()
