"""Entry point for docmark.

Delegates to the Click command group, which loads configuration and
sets up logging before running a subcommand.
"""

from docmark.cli.commands import cli


def main() -> None:
    """Launch the CLI."""
    cli()


if __name__ == "__main__":
    main()
