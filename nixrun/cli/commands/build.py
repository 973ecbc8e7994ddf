"""
Native Click implementation of the build command.

Usage: nixrun build [--nom/--no-nom] [-m MESSAGE] <flakeref> [extra args...]
"""

import click

from ...services.execution import BuildCommandBuilder
from ..context import NixrunContext
from ..decorators import handle_errors


@click.command(
    "build",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("flakeref")
@click.argument("extra_args", nargs=-1, type=click.UNPROCESSED)
@click.option("--nom/--no-nom", default=None, help="Pipe the build log through nom")
@click.option("-m", "--message", help="Message logged before the build starts")
@click.pass_obj
@handle_errors
def build(
    ctx: NixrunContext,
    flakeref: str,
    extra_args: tuple[str, ...],
    nom: bool | None,
    message: str | None,
) -> None:
    """Build a flake reference.

    Extra arguments are passed to the build tool after the configured
    build.extra_args.

    \b
    Examples:
        nixrun build .#default
        nixrun build --nom ~/dotfiles#laptop -- --impure
    """
    builder = (
        BuildCommandBuilder.from_config(ctx.config)
        .flakeref(flakeref)
        .message(message or f"Building {flakeref}")
        .extra_args(extra_args)
    )
    if nom is not None:
        builder.nom(nom)

    builder.build().exec()
