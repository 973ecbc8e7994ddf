"""
Diagnostic logging interface.

Info lines say what nixrun is about to do (a command's message); debug lines
carry the constructed command line and exit statuses.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def set_level(self, level: str) -> None:
        """Change the threshold to 'debug', 'info', 'warning' or 'error'."""
