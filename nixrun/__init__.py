"""
nixrun: construct, log and run external commands for nix workflows.

    from nixrun import BuildCommand, Command

    Command.builder().args(["nix", "flake", "update"]).build().exec()
"""

from .core.exceptions import (
    ConfigurationError,
    ExecutionError,
    ExitError,
    InvalidFlakeRefError,
    MissingEnvironmentError,
    NixrunException,
    OutputDecodeError,
    SpawnError,
)
from .core.models.process import ExitStatus, PipelineStatus
from .services.execution import (
    BuildCommand,
    BuildCommandBuilder,
    Command,
    CommandBuilder,
    SubprocessRunner,
    edit,
    edit_with,
    flake_directory,
)

__all__ = [
    "BuildCommand",
    "BuildCommandBuilder",
    "Command",
    "CommandBuilder",
    "ConfigurationError",
    "ExecutionError",
    "ExitError",
    "ExitStatus",
    "InvalidFlakeRefError",
    "MissingEnvironmentError",
    "NixrunException",
    "OutputDecodeError",
    "PipelineStatus",
    "SpawnError",
    "SubprocessRunner",
    "edit",
    "edit_with",
    "flake_directory",
]
