"""
nixrun's logger: stdlib logging behind the ILogger interface.

Console lines are bare messages on stderr, interleaving with the build
output the user is watching. The optional log file keeps timestamps.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar, TextIO

from ..core.interfaces.logger import ILogger


class NixrunLogger(ILogger):
    LOG_FILE_PATH = Path.home() / ".nixrun" / "nixrun.log"

    LEVELS: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "nixrun",
        level: str = "info",
        console: bool = True,
        to_file: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        # Handlers do the filtering; reconfiguring replaces earlier handlers
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        self._handlers: list[logging.Handler] = []
        if console:
            self._add(logging.StreamHandler(stream or sys.stderr), "%(message)s")
        if to_file:
            self.LOG_FILE_PATH.parent.mkdir(parents=True, exist_ok=True)
            self._add(
                RotatingFileHandler(self.LOG_FILE_PATH, maxBytes=5 * 1024 * 1024, backupCount=2),
                "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            )
        self.set_level(level)

    def _add(self, handler: logging.Handler, fmt: str) -> None:
        handler.setFormatter(logging.Formatter(fmt))
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        threshold = self.LEVELS.get(level.lower(), logging.INFO)
        for handler in self._handlers:
            handler.setLevel(threshold)


class NullLogger(ILogger):
    """Discards everything; used when nothing was bootstrapped."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
