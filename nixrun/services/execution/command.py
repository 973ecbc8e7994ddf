"""
Generic command invocation.

A Command is one program plus its argument vector, an optional
human-readable message and a dry-run flag. It is built once with
CommandBuilder and executed once.

Usage:
    cmd = (
        Command.builder()
        .args(["nix", "flake", "update"])
        .message("Updating flake inputs")
        .build()
    )
    cmd.exec()
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Iterable

from ...core.di import resolve_or_default
from ...core.exceptions import ConfigurationError, OutputDecodeError, SpawnError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.process import IProcessRunner
from ...core.models.base import ImmutableModel
from ...core.models.process import Stream
from .runner import default_runner

ArgLike = str | bytes | os.PathLike


def _get_logger() -> ILogger:
    from ..logging import NullLogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]


def normalize_args(values: Iterable[ArgLike]) -> list[str]:
    if isinstance(values, str | bytes):
        raise TypeError("expected an iterable of arguments, not a single string")
    return [os.fsdecode(v) for v in values]


class Command(ImmutableModel):
    """A single, shell-free program invocation."""

    args: tuple[str, ...]
    message: str | None = None
    dry: bool = False

    @classmethod
    def builder(cls) -> CommandBuilder:
        return CommandBuilder()

    @property
    def command_line(self) -> str:
        """The argument vector rendered as a shell-quoted string."""
        return shlex.join(self.args)

    def _program(self) -> str:
        if not self.args:
            raise ConfigurationError("Args was length 0", field="args")
        return self.args[0]

    def _announce(self, logger: ILogger) -> None:
        if self.message:
            logger.info("%s", self.message)
        logger.debug("%s", self.command_line)

    def exec(self, runner: IProcessRunner | None = None) -> None:
        """
        Run the command with stdout and stderr going to the caller's streams.

        The child's own exit code is not checked; only spawn and wait
        failures are raised.

        Args:
            runner: Process runner (resolved from the container if omitted)

        Raises:
            ConfigurationError: If the argument vector is empty
            SpawnError: If the program could not be started
        """
        program = self._program()
        logger = _get_logger()
        self._announce(logger)

        if self.dry:
            return

        runner = runner or default_runner()
        try:
            status = runner.join(self.args, stdout=Stream.INHERIT, stderr=Stream.INHERIT)
        except SpawnError as e:
            e.attach_message(self.message)
            raise
        logger.debug("%s %s", program, status)

    def exec_capture(self, runner: IProcessRunner | None = None) -> str | None:
        """
        Run the command and return its standard output as text.

        Standard error is discarded.

        Returns:
            The captured output, or None for a dry run. An empty string means
            the command ran and printed nothing.

        Raises:
            ConfigurationError: If the argument vector is empty
            SpawnError: If the program could not be started
            OutputDecodeError: If the output is not valid UTF-8
        """
        program = self._program()
        self._announce(_get_logger())

        if self.dry:
            return None

        runner = runner or default_runner()
        try:
            raw = runner.capture(self.args)
        except SpawnError as e:
            e.attach_message(self.message)
            raise

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise OutputDecodeError(
                f"Output of {program} is not valid UTF-8",
                command_message=self.message,
                context={"program": program},
            ) from e


class CommandBuilder:
    """Fluent builder for Command.

    ``args`` may be called several times; each call appends in order.
    """

    def __init__(self) -> None:
        self._args: list[str] | None = None
        self._message: str | None = None
        self._dry = False

    def args(self, values: Iterable[ArgLike]) -> CommandBuilder:
        if self._args is None:
            self._args = []
        self._args.extend(normalize_args(values))
        return self

    def arg(self, value: ArgLike) -> CommandBuilder:
        return self.args([value])

    def message(self, message: str) -> CommandBuilder:
        self._message = message
        return self

    def dry(self, dry: bool = True) -> CommandBuilder:
        self._dry = dry
        return self

    def build(self) -> Command:
        """
        Finalize into an immutable Command.

        Raises:
            ConfigurationError: If no arguments were supplied
        """
        if not self._args:
            raise ConfigurationError("Args was length 0", field="args")
        return Command(args=tuple(self._args), message=self._message, dry=self._dry)
