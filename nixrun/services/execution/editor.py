"""
Editor launcher.

Opens the user's editor in the directory a flake reference points at.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from ...core.di import resolve_or_default
from ...core.exceptions import InvalidFlakeRefError, MissingEnvironmentError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.process import IProcessRunner
from .runner import default_runner

EDITOR_VARIABLE = "EDITOR"


def _get_logger() -> ILogger:
    from ..logging import NullLogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]


def flake_directory(flakeref: str) -> str:
    """
    Compute the directory a flake reference lives in.

    The ``#attr`` fragment of the last path segment is dropped:
    ``a/b/c#output`` -> ``a/b/c``, ``x#y`` -> ``x``.

    Raises:
        InvalidFlakeRefError: If the reference is empty or has no directory part
    """
    if not flakeref:
        raise InvalidFlakeRefError("Flake reference is empty", flakeref=flakeref)

    pieces = flakeref.split("/")
    final_piece = pieces.pop()
    pieces.append(final_piece.split("#", 1)[0])

    directory = "/".join(pieces)
    if not directory:
        raise InvalidFlakeRefError("Flake reference has no directory part", flakeref=flakeref)
    return directory


def edit(
    flakeref: str,
    environ: Mapping[str, str] | None = None,
    runner: IProcessRunner | None = None,
) -> None:
    """
    Open ``$EDITOR`` in the flake's directory.

    Args:
        flakeref: Flake reference, e.g. ``~/dotfiles#laptop``
        environ: Environment to read EDITOR from (defaults to os.environ)
        runner: Process runner (resolved from the container if omitted)

    Raises:
        MissingEnvironmentError: If EDITOR is unset or empty
    """
    env = os.environ if environ is None else environ
    editor = env.get(EDITOR_VARIABLE)
    if not editor:
        raise MissingEnvironmentError(f"{EDITOR_VARIABLE} not set", variable=EDITOR_VARIABLE)
    edit_with(flakeref, editor, runner=runner)


def edit_with(flakeref: str, editor: str, runner: IProcessRunner | None = None) -> None:
    """
    Run ``<editor> .`` inside the flake's directory and wait for it to exit.

    The editor's exit code is not checked.

    Raises:
        InvalidFlakeRefError: If no directory can be derived from flakeref
        SpawnError: If the editor could not be started
    """
    directory = flake_directory(flakeref)
    logger = _get_logger()
    logger.debug("Opening %s in %s", editor, directory)

    runner = runner or default_runner()
    status = runner.join([editor, "."], cwd=directory)
    logger.debug("%s %s", editor, status)
