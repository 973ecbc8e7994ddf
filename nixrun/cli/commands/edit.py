"""
Native Click implementation of the edit command.

Usage: nixrun edit [--editor PROGRAM] <flakeref>
"""

import click

from ...services.execution import edit as edit_flake
from ...services.execution import edit_with
from ..context import NixrunContext
from ..decorators import handle_errors


@click.command("edit")
@click.argument("flakeref")
@click.option("--editor", help="Editor to run instead of $EDITOR")
@click.pass_obj
@handle_errors
def edit(ctx: NixrunContext, flakeref: str, editor: str | None) -> None:
    """Open an editor in the directory of a flake.

    \b
    Examples:
        nixrun edit ~/dotfiles#laptop
        nixrun edit --editor hx ./infra#web
    """
    if editor:
        edit_with(flakeref, editor)
    else:
        edit_flake(flakeref)
