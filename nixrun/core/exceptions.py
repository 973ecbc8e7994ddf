"""
Custom exception hierarchy for nixrun.

Every failure raised by the execution core is one of these types, so callers
can tell a bad invocation apart from a missing binary or a failing build.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.process import ExitStatus


class NixrunException(Exception):
    """
    Base exception for all nixrun errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (program, command line, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(NixrunException, ValueError):
    """
    An invocation was constructed incorrectly.

    Raised before any process is spawned, e.g. for an empty argument vector
    or a builder that is missing a required field.

    Inherits from ValueError so callers validating input can catch it.
    """

    exit_code: int = 2

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message, context=ctx, cause=cause)


class InvalidFlakeRefError(ConfigurationError):
    """A flake reference that does not yield a usable directory."""

    def __init__(
        self,
        message: str,
        *,
        flakeref: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if flakeref is not None:
            ctx["flakeref"] = flakeref
        super().__init__(message, context=ctx, cause=cause)


class MissingEnvironmentError(NixrunException):
    """
    A required environment variable is not set.

    There is no fallback: the calling operation stops before spawning.
    """

    exit_code: int = 2

    def __init__(
        self,
        message: str,
        *,
        variable: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if variable:
            ctx["variable"] = variable
        super().__init__(message, context=ctx, cause=cause)
        self.variable = variable


# =============================================================================
# Execution Errors
# =============================================================================


class ExecutionError(NixrunException):
    """
    Base class for errors raised while running a process.

    The human-readable message supplied when the command was built is
    attached as ``context["message"]``; it never replaces the underlying
    cause.
    """

    def __init__(
        self,
        message: str,
        *,
        command_message: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if command_message:
            ctx["message"] = command_message
        super().__init__(message, context=ctx, cause=cause)

    def attach_message(self, command_message: str | None) -> None:
        """Attach a command's human-readable message as extra context."""
        if command_message:
            self.context["message"] = command_message


class SpawnError(ExecutionError):
    """
    The operating system could not create or wait on a child process.

    Raised for missing binaries, permission errors, bad working directories.
    """

    exit_code: int = 127

    def __init__(
        self,
        message: str,
        *,
        program: str | None = None,
        command_message: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if program:
            ctx["program"] = program
        super().__init__(message, command_message=command_message, context=ctx, cause=cause)
        self.program = program


class OutputDecodeError(ExecutionError):
    """Captured standard output could not be decoded as text."""


class ExitError(ExecutionError):
    """
    A process or pipeline terminated with a non-success status.

    The raw status is kept on ``status`` for diagnostic display and the
    suggested CLI exit code mirrors the child's own code.
    """

    def __init__(
        self,
        status: ExitStatus,
        *,
        command: str | None = None,
        stage: str | None = None,
        command_message: str | None = None,
        context: dict | None = None,
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = command
        if stage:
            ctx["stage"] = stage
        super().__init__(
            f"Command {status}",
            command_message=command_message,
            context=ctx,
        )
        self.status = status
        self.exit_code = status.code if status.code else 1
