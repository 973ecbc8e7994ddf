"""
Configuration sections.

Each section maps one table of ``.nixrun/config.toml``. Values coming from
TOML or environment variables are coerced (``"true"`` -> ``True``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigSection(BaseModel):
    """Lenient base: coerce scalar types and ignore keys nixrun does not know."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class ProgramsConfig(ConfigSection):
    """Executables nixrun spawns for builds."""

    nix: str = "nix"
    formatter: str = "nom"

    @field_validator("nix", "formatter")
    @classmethod
    def require_program(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("program must be a non-empty name or path")
        return value


class BuildConfig(ConfigSection):
    """Defaults applied to every ``nixrun build``."""

    nom: bool = False
    strict_pipeline: bool = True
    extra_args: list[str] = Field(default_factory=list)

    @field_validator("extra_args", mode="before")
    @classmethod
    def split_string(cls, value: Any) -> Any:
        # NIXRUN_BUILD__EXTRA_ARGS="-L --impure" arrives as one string
        if isinstance(value, str):
            return value.split()
        return value or []


class LoggingConfig(ConfigSection):
    """Where log lines go and how chatty they are."""

    level: LogLevel = "info"
    console: bool = True
    file: bool = False
