"""Configure the shared logger for arginfoUpdater."""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from loguru import logger as _logger

if TYPE_CHECKING:
    from loguru import Logger  # only for type checking

NOTICE = "NOTICE"


def _register_levels() -> None:
    try:
        _logger.level(NOTICE)
    except ValueError:
        _logger.level(NOTICE, no=22, color="<cyan><bold>", icon="!")


class Log:
    """Ensure a single configured logger across the package."""

    _instance: Optional["Log"] = None

    def __new__(cls: type["Log"], *args: Any, **kwargs: Any) -> "Log":
        """Establish or reconfigure the singleton logger instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._configure(*args, **kwargs)
        elif args or kwargs:
            cls._instance._configure(*args, **kwargs)
        return cls._instance

    def _configure(
        self,
        log_file: str | Path | None = None,
        debug_mode: bool = False,
        rotation: str = "5 MB",
        retention: int = 3,
    ) -> None:
        """Route messages to the console and, optionally, to ``log_file``."""
        _register_levels()
        _logger.remove()

        # Resolve sys.stdout per message so redirected streams are honoured.
        _logger.add(
            lambda message: sys.stdout.write(message),
            level="DEBUG" if debug_mode else "INFO",
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>",
            colorize=sys.stdout.isatty(),
        )

        if log_file is not None:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            _logger.add(
                path,
                level="DEBUG",
                rotation=rotation,
                retention=retention,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
                "{name}:{function}:{line} - {message}",
            )

    @property
    def logger(self) -> "Logger":
        """Return the configured loguru logger for emission."""
        return _logger


__all__ = ["Log", "NOTICE"]
