"""
Layered settings for nixrun.

Values are resolved, highest priority first, from:

1. ``NIXRUN_<SECTION>__<FIELD>`` environment variables
   (e.g. ``NIXRUN_BUILD__NOM=true``)
2. the nearest ``.nixrun/config.toml`` at or above the working directory
3. the section defaults in ``core/models/config.py``

A config file that cannot be read, parsed or validated never stops a
command: the problem is reported as ``_config_error`` and the defaults apply.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

from .models.config import BuildConfig, LoggingConfig, ProgramsConfig

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_RELPATH = Path(".nixrun") / "config.toml"


def find_config_file(start_dir: str | Path | None = None) -> Path | None:
    """Return the closest ``.nixrun/config.toml`` walking up from start_dir."""
    start = Path(start_dir) if start_dir else Path.cwd()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_RELPATH
        if candidate.is_file():
            return candidate
    return None


class NixrunSettings(BaseSettings):
    """The ``programs``, ``build`` and ``logging`` sections, merged."""

    model_config = SettingsConfigDict(
        env_prefix="NIXRUN_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    programs: ProgramsConfig = Field(default_factory=ProgramsConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # File contents arrive as init kwargs, so the environment goes first
        return env_settings, init_settings


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    )


def _defaults() -> dict[str, Any]:
    return {
        "programs": ProgramsConfig().model_dump(),
        "build": BuildConfig().model_dump(),
        "logging": LoggingConfig().model_dump(),
    }


def load_config(
    start_dir: str | Path | None = None,
    config_path: Path | None = None,
) -> dict[str, Any]:
    """
    Resolve the effective configuration.

    Args:
        start_dir: Directory to search upwards from (defaults to cwd)
        config_path: Explicit file, skips the search

    Returns:
        ``{"programs": {...}, "build": {...}, "logging": {...}}`` plus
        ``_config_file`` when a file was used and ``_config_error`` when
        it had to be ignored
    """
    path = config_path or find_config_file(start_dir)
    file_values: dict[str, Any] = {}
    error: str | None = None

    if path is not None:
        try:
            file_values = _read_toml(path)
        except (tomllib.TOMLDecodeError, OSError) as e:
            error = f"Ignoring {path}: {e}"

    try:
        config = NixrunSettings(**file_values).model_dump()
    except ValidationError as e:
        source = path if path is not None else "environment"
        error = f"Ignoring invalid settings from {source}: {_describe(e)}"
        config = _defaults()
    except SettingsError as e:
        # raised when a NIXRUN_* value cannot be decoded at all
        error = f"Ignoring environment settings: {e}"
        config = _defaults()

    if error:
        config["_config_error"] = error
    elif path is not None:
        config["_config_file"] = str(path)
    return config
