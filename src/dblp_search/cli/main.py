"""
Main CLI entry point for dblp-search.

This module provides the main CLI group and global options.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from dblp_search import __version__
from dblp_search.cli.formatting import console, print_error
from dblp_search.cli.utils import setup_logging


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.quiet: bool = False


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to config file (default: dblp.yml)",
)
@click.option(
    "--verbose", "-v",
    count=True,
    help="Enable verbose logging (can be repeated: -vv)",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="dblp-search")
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: int, quiet: bool):
    """
    dblp-search - query the dblp computer science bibliography

    \b
    Examples:
      dblp-search publication "The Part-Time Parliament"
      dblp-search author "Leslie Lamport" --format json
      dblp-search venue TOCS
    """
    cli_ctx = ctx.ensure_object(CLIContext)
    cli_ctx.config_path = config
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet

    setup_logging(verbose=verbose, quiet=quiet)


# Commands register on import, after the group exists
from dblp_search.cli.search import author, publication, venue  # noqa: E402

cli.add_command(publication)
cli.add_command(author)
cli.add_command(venue)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
