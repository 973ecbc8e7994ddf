"""
Click-based CLI for nixrun.

Usage:
    from nixrun.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from .context import NixrunContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("nixrun")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nixrun")
@click.option("-v", "--verbose", is_flag=True, help="Log constructed command lines")
@click.option("-q", "--quiet", is_flag=True, help="Only log warnings and errors")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """nixrun - run nix builds, commands and editors

    \b
    Commands:
        nixrun build <flakeref>   Build a flake, optionally through nom
        nixrun run <program>      Run a program (with --dry / --capture)
        nixrun edit <flakeref>    Open $EDITOR in a flake's directory
        nixrun config [key]       Show the effective configuration
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    from ..core.bootstrap import bootstrap
    from ..core.di import resolve_or_default
    from ..core.interfaces.presenter import IPresenter
    from ..presenters.console import ConsolePresenter

    nixrun_ctx = NixrunContext.create()

    log_level = None
    if verbose:
        log_level = "debug"
    elif quiet:
        log_level = "warning"
    bootstrap(config=nixrun_ctx.config, log_level=log_level)

    if nixrun_ctx.config_error:
        presenter = resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]
        presenter.print_warning(nixrun_ctx.config_error)

    ctx.obj = nixrun_ctx


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "NixrunContext",
    "__version__",
    "cli",
    "register_commands",
]
