"""Output presenters for nixrun."""

from .console import ConsolePresenter

__all__ = ["ConsolePresenter"]
