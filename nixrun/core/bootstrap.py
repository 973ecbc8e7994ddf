"""
Wire the service container for a CLI run.

Library callers can skip this entirely: every service falls back to a
default through ``resolve_or_default``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter
from .interfaces.process import IProcessRunner

_initialized = False


def bootstrap(
    config: dict[str, Any] | None = None,
    log_level: str | None = None,
    start_dir: Path | None = None,
) -> ServiceContainer:
    """
    Register the presenter, logger and process runner once per process.

    Args:
        config: Already resolved configuration; loaded from start_dir if omitted
        log_level: Overrides ``logging.level`` (used by -v / -q)
        start_dir: Where to look for ``.nixrun/config.toml`` when config is omitted

    Returns:
        The global ServiceContainer
    """
    global _initialized

    container = get_container()
    if _initialized:
        return container

    if config is None:
        from .settings import load_config

        config = load_config(start_dir=start_dir)

    _register_services(container, config.get("logging", {}), log_level)
    _initialized = True
    return container


def _register_services(
    container: ServiceContainer,
    logging_config: dict[str, Any],
    log_level: str | None,
) -> None:
    from ..presenters.console import ConsolePresenter
    from ..services.execution.runner import SubprocessRunner
    from ..services.logging import NixrunLogger

    container.register_singleton(IPresenter, instance=ConsolePresenter())  # type: ignore[type-abstract]
    container.register_singleton(
        ILogger,  # type: ignore[type-abstract]
        factory=lambda: NixrunLogger(
            level=log_level or logging_config.get("level", "info"),
            console=logging_config.get("console", True),
            to_file=logging_config.get("file", False),
        ),
    )
    # A runner registered before bootstrap wins
    if not container.is_registered(IProcessRunner):
        container.register_singleton(IProcessRunner, factory=SubprocessRunner)  # type: ignore[type-abstract]


def reset() -> None:
    """Forget all registrations (tests call this between cases)."""
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    return _initialized
