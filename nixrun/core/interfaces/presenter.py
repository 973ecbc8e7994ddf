"""User-facing output, as opposed to diagnostic logging."""

from abc import ABC, abstractmethod


class IPresenter(ABC):
    @abstractmethod
    def print(self, message: str) -> None:
        """Write normal output, e.g. text captured from a command."""

    @abstractmethod
    def print_error(self, message: str) -> None:
        """Report a failure that ends the command."""

    @abstractmethod
    def print_warning(self, message: str) -> None:
        """Report a problem the command works around, e.g. an ignored config file."""
