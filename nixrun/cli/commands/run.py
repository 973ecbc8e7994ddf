"""
Native Click implementation of the run command.

Usage: nixrun run [--dry] [--capture] [-m MESSAGE] -- <program> [args...]
"""

import click

from ...core.di import resolve_or_default
from ...core.interfaces.presenter import IPresenter
from ...presenters.console import ConsolePresenter
from ...services.execution import Command
from ..context import NixrunContext
from ..decorators import handle_errors


@click.command(
    "run",
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.option("--dry", is_flag=True, help="Log the command without running it")
@click.option("--capture", is_flag=True, help="Capture stdout and print it afterwards")
@click.option("-m", "--message", help="Human-readable description of the command")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
@handle_errors
def run(
    ctx: NixrunContext,
    dry: bool,
    capture: bool,
    message: str | None,
    args: tuple[str, ...],
) -> None:
    """Run a program without a shell.

    \b
    Examples:
        nixrun run -m "Updating inputs" nix flake update
        nixrun run --capture nix eval --raw .#name
        nixrun run --dry nix store gc
    """
    builder = Command.builder().args(args).dry(dry)
    if message:
        builder.message(message)
    command = builder.build()

    if not capture:
        command.exec()
        return

    output = command.exec_capture()
    if output:
        presenter = resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]
        presenter.print(output.rstrip("\n"))
