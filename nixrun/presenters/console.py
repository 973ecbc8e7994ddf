"""Terminal presenter: captured output on stdout, problems on stderr."""

import sys
from typing import TextIO

from ..core.interfaces.presenter import IPresenter

_RED = "\033[31m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


class ConsolePresenter(IPresenter):
    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out or sys.stdout
        self._err = err or sys.stderr
        self._color = self._err.isatty()

    def _problem(self, label: str, color: str, message: str) -> None:
        line = f"{label}: {message}"
        if self._color:
            line = f"{color}{line}{_RESET}"
        self._err.write(line + "\n")

    def print(self, message: str) -> None:
        self._out.write(message + "\n")

    def print_error(self, message: str) -> None:
        self._problem("Error", _RED, message)

    def print_warning(self, message: str) -> None:
        self._problem("Warning", _YELLOW, message)
