"""Fatal error types raised by the arginfo updater."""

from __future__ import annotations

from pathlib import Path


class ArginfoUpdaterError(RuntimeError):
    """Base class for conditions that abort the whole run."""


class SourceDirectoryError(ArginfoUpdaterError):
    """Raised when the native source root cannot be scanned."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot scan source directory {path}: {reason}")
        self.path = path


class CacheDirectoryError(ArginfoUpdaterError):
    """Raised when the stub cache directory cannot be created."""

    def __init__(self, path: Path, reason: str | None = None):
        message = f"Make stub dir failed: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class GeneratorFetchError(ArginfoUpdaterError):
    """Raised when the reference ``gen_stub.php`` cannot be obtained."""


class InterpreterError(ArginfoUpdaterError):
    """Raised when the PHP interpreter cannot be started."""

    def __init__(self, php_binary: str, reason: str):
        super().__init__(f"Unable to run {php_binary}: {reason}")
        self.php_binary = php_binary


__all__ = [
    "ArginfoUpdaterError",
    "CacheDirectoryError",
    "GeneratorFetchError",
    "InterpreterError",
    "SourceDirectoryError",
]
