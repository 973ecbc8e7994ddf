"""
Per-invocation state shared by nixrun commands through ``ctx.obj``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class NixrunContext:
    """Working directory and the configuration resolved for it."""

    cwd: Path
    config: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, cwd: Path | None = None) -> NixrunContext:
        from ..core.settings import load_config

        cwd = cwd or Path.cwd()
        return cls(cwd=cwd, config=load_config(start_dir=cwd))

    @property
    def config_file(self) -> str | None:
        return self.config.get("_config_file")

    @property
    def config_error(self) -> str | None:
        """Why the config file was ignored, if it was."""
        return self.config.get("_config_error")
