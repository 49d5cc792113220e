"""Regenerate PHP extension arginfo declarations from stub files."""

__version__ = "0.1.0"

from .config import UpdaterOptions
from .errors import (
    ArginfoUpdaterError,
    CacheDirectoryError,
    GeneratorFetchError,
    InterpreterError,
    SourceDirectoryError,
)
from .updater import ArginfoUpdater, UpdateSummary

__all__ = [
    "__version__",
    "ArginfoUpdater",
    "ArginfoUpdaterError",
    "CacheDirectoryError",
    "GeneratorFetchError",
    "InterpreterError",
    "SourceDirectoryError",
    "UpdateSummary",
    "UpdaterOptions",
]
