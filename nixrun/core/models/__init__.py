"""
Pydantic models for nixrun.

Value objects (commands, exit statuses) are frozen and strict; config
sections coerce TOML and environment input.
"""

from .base import ImmutableModel
from .config import BuildConfig, LoggingConfig, ProgramsConfig
from .process import ExitStatus, PipelineStatus, Stream

__all__ = [
    "BuildConfig",
    "ExitStatus",
    "ImmutableModel",
    "LoggingConfig",
    "PipelineStatus",
    "ProgramsConfig",
    "Stream",
]
