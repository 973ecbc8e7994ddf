"""
Build command invocation.

Runs ``nix build <flakeref> [extra args]`` either directly or, in nom
mode, as a pipeline whose internal-json log stream is rendered by a
formatter (``nom --json``). Any non-success exit status is an ExitError.
"""

from __future__ import annotations

import shlex
from collections.abc import Iterable
from typing import Any

from ...core.di import resolve_or_default
from ...core.exceptions import ConfigurationError, ExitError, SpawnError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.process import IProcessRunner
from ...core.models.base import ImmutableModel
from ...core.models.process import Stream
from .command import ArgLike, normalize_args
from .runner import default_runner

NOM_LOG_ARGS = ("--log-format", "internal-json", "--verbose")


def _get_logger() -> ILogger:
    from ..logging import NullLogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]


class BuildCommand(ImmutableModel):
    """A build of one flake reference.

    Attributes:
        message: Logged at info level before anything runs
        flakeref: Target passed verbatim to the build tool
        extra_args: Appended after the base invocation
        nom: Pipe the build log through the formatter
        program: Build tool executable
        formatter: Formatter executable used when ``nom`` is set
        strict_pipeline: In nom mode, report a failing build even when the
            formatter exits cleanly
    """

    message: str
    flakeref: str
    extra_args: tuple[str, ...] = ()
    nom: bool = False
    program: str = "nix"
    formatter: str = "nom"
    strict_pipeline: bool = True

    @classmethod
    def builder(cls) -> BuildCommandBuilder:
        return BuildCommandBuilder()

    def build_argv(self) -> list[str]:
        argv = [self.program, "build", self.flakeref]
        if self.nom:
            argv.extend(NOM_LOG_ARGS)
        argv.extend(self.extra_args)
        return argv

    def formatter_argv(self) -> list[str]:
        return [self.formatter, "--json"]

    @property
    def command_line(self) -> str:
        rendered = shlex.join(self.build_argv())
        if self.nom:
            rendered = f"{rendered} | {shlex.join(self.formatter_argv())}"
        return rendered

    def exec(self, runner: IProcessRunner | None = None) -> None:
        """
        Run the build and wait for it to finish.

        Args:
            runner: Process runner (resolved from the container if omitted)

        Raises:
            SpawnError: If the build tool or formatter could not be started
            ExitError: If the build (or, in nom mode, the deciding stage)
                did not exit with code 0
        """
        logger = _get_logger()
        logger.info("%s", self.message)
        logger.debug("%s", self.command_line)

        runner = runner or default_runner()
        try:
            if self.nom:
                statuses = runner.pipeline(self.build_argv(), self.formatter_argv())
                stage, status = statuses.dominant(self.strict_pipeline)
                if not statuses.producer.success and stage == "consumer":
                    logger.debug(
                        "%s %s, ignored because the formatter %s",
                        self.program,
                        statuses.producer,
                        statuses.consumer,
                    )
                argv = self.build_argv() if stage == "producer" else self.formatter_argv()
            else:
                stage = None
                argv = self.build_argv()
                status = runner.join(argv, stdout=Stream.INHERIT, stderr=Stream.MERGE)
        except SpawnError as e:
            e.attach_message(self.message)
            raise

        logger.debug("%s %s", argv[0], status)
        if not status.success:
            raise ExitError(
                status,
                command=shlex.join(argv),
                stage=stage,
                command_message=self.message,
            )


class BuildCommandBuilder:
    """Fluent builder for BuildCommand.

    ``message`` and ``flakeref`` are required; ``extra_args`` may be called
    several times and appends in order.
    """

    def __init__(self) -> None:
        self._message: str | None = None
        self._flakeref: str | None = None
        self._extra_args: list[str] = []
        self._options: dict[str, Any] = {}

    @classmethod
    def from_config(cls, config: dict) -> BuildCommandBuilder:
        """Start a builder pre-filled from a loaded config dict."""
        programs = config.get("programs", {})
        build = config.get("build", {})

        builder = cls()
        if programs.get("nix"):
            builder.program(programs["nix"])
        if programs.get("formatter"):
            builder.formatter(programs["formatter"])
        if "nom" in build:
            builder.nom(bool(build["nom"]))
        if "strict_pipeline" in build:
            builder.strict_pipeline(bool(build["strict_pipeline"]))
        builder.extra_args(build.get("extra_args") or [])
        return builder

    def message(self, message: str) -> BuildCommandBuilder:
        self._message = message
        return self

    def flakeref(self, flakeref: str) -> BuildCommandBuilder:
        self._flakeref = flakeref
        return self

    def extra_args(self, values: Iterable[ArgLike]) -> BuildCommandBuilder:
        self._extra_args.extend(normalize_args(values))
        return self

    def nom(self, nom: bool = True) -> BuildCommandBuilder:
        self._options["nom"] = nom
        return self

    def program(self, program: str) -> BuildCommandBuilder:
        self._options["program"] = program
        return self

    def formatter(self, formatter: str) -> BuildCommandBuilder:
        self._options["formatter"] = formatter
        return self

    def strict_pipeline(self, strict: bool = True) -> BuildCommandBuilder:
        self._options["strict_pipeline"] = strict
        return self

    def build(self) -> BuildCommand:
        """
        Finalize into an immutable BuildCommand.

        Raises:
            ConfigurationError: If message or flakeref was never set
        """
        if self._message is None:
            raise ConfigurationError("BuildCommand requires a message", field="message")
        if self._flakeref is None:
            raise ConfigurationError("BuildCommand requires a flakeref", field="flakeref")
        return BuildCommand(
            message=self._message,
            flakeref=self._flakeref,
            extra_args=tuple(self._extra_args),
            **self._options,
        )
