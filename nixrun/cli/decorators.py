"""
Click decorators for nixrun CLI commands.

- handle_errors: Reports nixrun errors through the presenter and exits
  with the error's suggested exit code
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from ..core.exceptions import NixrunException

F = TypeVar("F", bound=Callable[..., Any])


def handle_errors(f: F) -> F:
    """Decorator translating NixrunException into a CLI exit.

    Usage:
        @cli.command()
        @click.pass_obj
        @handle_errors
        def build(ctx: NixrunContext, flakeref: str):
            ...
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except NixrunException as e:
            from ..core.di import resolve_or_default
            from ..core.interfaces.presenter import IPresenter
            from ..presenters.console import ConsolePresenter

            presenter = resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]
            presenter.print_error(str(e))
            raise SystemExit(e.exit_code) from e

    return wrapper  # type: ignore[return-value]
