"""
Click command implementations for nixrun CLI.

Each module corresponds to a nixrun command (e.g., build.py implements
'nixrun build'). Commands are registered with the main CLI group via the
register_commands() function in nixrun.cli.
"""

from .build import build
from .config import config
from .edit import edit
from .run import run

COMMANDS = [
    build,
    config,
    edit,
    run,
]

__all__ = [
    "COMMANDS",
    "build",
    "config",
    "edit",
    "run",
]
