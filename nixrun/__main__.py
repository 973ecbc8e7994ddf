"""
Entry point for the `nixrun` command-line interface.

nixrun builds flakes (optionally piping the log through nom), runs
arbitrary programs without a shell, and opens an editor in a flake's
directory.
"""


def main():
    """Main entry point for the nixrun CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
