"""
Execution services: command types, the process runner and the editor launcher.
"""

from .build import NOM_LOG_ARGS, BuildCommand, BuildCommandBuilder
from .command import Command, CommandBuilder
from .editor import edit, edit_with, flake_directory
from .runner import SubprocessRunner, default_runner

__all__ = [
    "NOM_LOG_ARGS",
    "BuildCommand",
    "BuildCommandBuilder",
    "Command",
    "CommandBuilder",
    "SubprocessRunner",
    "default_runner",
    "edit",
    "edit_with",
    "flake_directory",
]
