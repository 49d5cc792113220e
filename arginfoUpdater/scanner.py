"""Discover native source files below an extension source root."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .config import SOURCE_SUFFIXES
from .errors import SourceDirectoryError


def scan_sources(root: str | Path, suffixes: Iterable[str] = SOURCE_SUFFIXES) -> list[Path]:
    """Return the native source files below ``root`` in a stable order.

    Args:
        root: Directory searched recursively.
        suffixes: File extensions (with the leading dot) to accept.

    Returns:
        Sorted list of matching file paths.

    Raises:
        SourceDirectoryError: If ``root`` is missing, is not a directory or
            cannot be listed.
    """

    root_path = Path(root)
    if not root_path.exists():
        raise SourceDirectoryError(root_path, "no such directory")
    if not root_path.is_dir():
        raise SourceDirectoryError(root_path, "not a directory")

    accepted = {suffix.lower() for suffix in suffixes}
    try:
        candidates = [
            path
            for path in root_path.rglob("*")
            if path.is_file() and path.suffix.lower() in accepted
        ]
    except OSError as exc:
        raise SourceDirectoryError(root_path, str(exc)) from exc
    return sorted(candidates)


__all__ = ["scan_sources"]
