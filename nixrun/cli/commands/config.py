"""
Read-only view of the configuration a command would run with.

Usage: nixrun config [section.field]
"""

import json
from typing import Any

import click

from ...core.exceptions import ConfigurationError
from ..context import NixrunContext
from ..decorators import handle_errors


def _settings(config: dict[str, Any]) -> dict[str, dict[str, Any]]:
    return {name: values for name, values in config.items() if not name.startswith("_")}


@click.command("config")
@click.argument("key", required=False)
@click.pass_obj
@handle_errors
def config(ctx: NixrunContext, key: str | None) -> None:
    """Show the effective configuration.

    Values come from NIXRUN_<SECTION>__<FIELD> environment variables, then
    the nearest .nixrun/config.toml, then built-in defaults.

    \b
    Examples:
        nixrun config
        nixrun config build.nom
    """
    sections = _settings(ctx.config)

    if key:
        section, _, field = key.partition(".")
        if field not in sections.get(section, {}):
            raise ConfigurationError(f"Unknown config key: {key}", field=key)
        click.echo(json.dumps(sections[section][field]))
        return

    if ctx.config_file:
        click.echo(f"# {ctx.config_file}")
    elif ctx.config_error:
        click.echo("# defaults (config file ignored)")
    else:
        click.echo("# defaults (no .nixrun/config.toml found)")
    for section, values in sections.items():
        for field, value in values.items():
            click.echo(f"{section}.{field} = {json.dumps(value)}")
