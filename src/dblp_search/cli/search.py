"""
Search commands for the three dblp endpoints.
"""

import json
from pathlib import Path
from typing import Optional

import click

from dblp_search.cli.formatting import print_info, print_records, print_success, print_warning
from dblp_search.cli.main import pass_context
from dblp_search.cli.utils import load_config, save_records
from dblp_search.core.models import Query, RecordKind
from dblp_search.providers import DblpProvider
from dblp_search.utils.exceptions import DblpError


def search_options(func):
    """Options shared by every search command."""
    func = click.option(
        "--lenient",
        is_flag=True,
        help="Skip malformed hits instead of failing",
    )(func)
    func = click.option(
        "--output", "-o",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Write records to this file (JSON or JSONL, see --format)",
    )(func)
    func = click.option(
        "--format", "output_format",
        type=click.Choice(["table", "json", "jsonl"]),
        default="table",
        show_default=True,
        help="Output format",
    )(func)
    func = click.option(
        "--first",
        type=click.IntRange(min=0),
        help="Offset of the first hit",
    )(func)
    func = click.option(
        "--max-results", "-n",
        type=click.IntRange(1, 1000),
        help="Maximum number of hits to request",
    )(func)
    func = click.argument("query_text", metavar="QUERY")(func)
    return func


def run_search(
    cli_ctx,
    kind: RecordKind,
    query_text: str,
    max_results: Optional[int],
    first: Optional[int],
    output_format: str,
    output: Optional[Path],
    lenient: bool,
) -> None:
    """Execute one search and print or save its records.

    Raises:
        click.ClickException: If the search fails
    """
    config = load_config(cli_ctx.config_path)
    if lenient:
        config.strict = False

    provider = DblpProvider(config)
    query = Query(
        text=query_text,
        max_results=max_results if max_results is not None else config.max_results,
        first=first,
    )

    try:
        records = provider.search(query, kind)
    except DblpError as e:
        raise click.ClickException(f"{kind.value} search failed: {e}")
    finally:
        provider.close()

    if output:
        save_records(records, output, format="json" if output_format == "json" else "jsonl")
        if not cli_ctx.quiet:
            print_success(f"Saved {len(records)} {kind.value} records to {output}")
        return

    if output_format == "json":
        click.echo(json.dumps([r.model_dump() for r in records], indent=2, ensure_ascii=False))
    elif output_format == "jsonl":
        for record in records:
            click.echo(record.model_dump_json())
    elif not records:
        print_warning(f"No {kind.value} matches for '{query_text}'")
    else:
        print_records(records, kind)
        if not cli_ctx.quiet:
            print_info(f"{len(records)} {kind.value} records")


@click.command()
@search_options
@pass_context
def publication(cli_ctx, query_text, max_results, first, output_format, output, lenient):
    """Search dblp publications."""
    run_search(
        cli_ctx, RecordKind.PUBLICATION, query_text, max_results, first, output_format, output,
        lenient,
    )


@click.command()
@search_options
@pass_context
def author(cli_ctx, query_text, max_results, first, output_format, output, lenient):
    """Search dblp authors."""
    run_search(
        cli_ctx, RecordKind.AUTHOR, query_text, max_results, first, output_format, output, lenient
    )


@click.command()
@search_options
@pass_context
def venue(cli_ctx, query_text, max_results, first, output_format, output, lenient):
    """Search dblp venues."""
    run_search(
        cli_ctx, RecordKind.VENUE, query_text, max_results, first, output_format, output, lenient
    )
